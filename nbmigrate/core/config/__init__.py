from .config_loader import ComponentTarget, MigrationSettings, get_config_path, load_settings

__all__ = ["ComponentTarget", "MigrationSettings", "get_config_path", "load_settings"]
