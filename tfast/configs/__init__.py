from tfast.configs.settings import Settings, UvicornSettings

__all__ = [
    "Settings",
    "UvicornSettings",
]
