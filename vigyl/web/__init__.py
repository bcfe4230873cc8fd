"""JSON API for the VIGYL presentation layer."""


def __getattr__(name: str):
    # Avoid building the default app (and loading the catalog) at package import time.
    if name == "create_app":
        from vigyl.web.app import create_app

        globals()["create_app"] = create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["create_app"]
