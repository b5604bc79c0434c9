"""
Core Layer - Configuration, logging, errors and dependency wiring.

Import from the submodules (core.config, core.logger, ...) directly.
"""
