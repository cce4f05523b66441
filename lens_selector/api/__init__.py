from lens_selector.api.app import create_app

__all__ = ["create_app"]
