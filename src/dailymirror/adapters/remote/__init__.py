"""Remote catalog service adapters."""

from dailymirror.adapters.remote.http import HttpRemote


__all__ = ["HttpRemote"]
