"""
Detecting the plugin's own version.

The version is not stored in the codebase: it comes from the git tags
at packaging time, and is read from the distribution's metadata at startup.
"""
import importlib.metadata

version: str | None = None

try:
    name, *_ = __name__.split('.')  # usually "kubexample", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # running from a source tree, not installed.
