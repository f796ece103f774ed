"""Bundled configuration files for PodScale."""
