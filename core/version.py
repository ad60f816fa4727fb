from importlib import metadata

try:
    __version__ = metadata.version("brokersite")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    from brokersite import __version__
