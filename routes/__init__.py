"""HTTP route modules. Each exposes a ``router`` mounted by ``api.create_app``."""
