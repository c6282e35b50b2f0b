from .resolver import RegistryResolver, asset_key, group_key, user_from_record

__all__ = ["RegistryResolver", "asset_key", "group_key", "user_from_record"]
