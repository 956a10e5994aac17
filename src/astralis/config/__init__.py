"""Packaged configuration resources (``defaults.yaml``)."""
