"""Service Layer - relay orchestration over the provider interface."""
