"""helm-nexus-push: push Helm charts to a Nexus Helm repository."""

__version__ = "0.3.0"
