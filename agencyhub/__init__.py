"""Agency tenant provisioning, quota and add-on billing engine."""

__version__ = "0.1.0"
