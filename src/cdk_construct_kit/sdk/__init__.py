from .sdk_provider import Mode, SdkProvider

__all__ = ["Mode", "SdkProvider"]
