"""I/O adapters: HTTP and subprocess probes, AWS provisioner."""
