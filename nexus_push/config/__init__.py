"""Settings for helm-nexus-push.

Settings come from ``HELM_NEXUS_PUSH_*`` environment variables and,
optionally, a YAML file passed with ``--config``.

Example:
    >>> from nexus_push.config import PushSettings
    >>> settings = PushSettings.from_yaml("nexus-push.yaml")
    >>> settings.with_helm_home("/home/me/.helm").auth_path
    PosixPath('/home/me/.helm/repository')
"""

from nexus_push.config.settings import PushSettings

__all__ = ["PushSettings"]
