"""Internal packages (not part of the public API surface)."""
