"""Environment-driven configuration for the admin session."""
from .settings import ManagerSettings, load_settings

__all__ = ["ManagerSettings", "load_settings"]
