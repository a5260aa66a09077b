"""Domain, configuration, interfaces and services."""
