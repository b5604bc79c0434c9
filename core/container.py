"""
Dependency Injection Container.

This module provides a simple DI container for managing interface implementations.
"""

from typing import Any, Callable, Dict, Type, TypeVar

from core.logger import logger

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.

    Supports:
    - Singleton instances (register)
    - Factory functions (register_factory)
    - Interface resolution (resolve)
    """

    _instances: Dict[Type, Any] = {}
    _providers: Dict[Type, Callable[[], Any]] = {}
    _initialized: bool = False

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """
        Register a singleton instance for an interface.

        Args:
            interface: The interface type (e.g., IAIProvider)
            instance: The implementation instance
        """
        cls._instances[interface] = instance

    @classmethod
    def register_factory(cls, interface: Type[T], factory: Callable[[], T]) -> None:
        """
        Register a factory function for an interface.
        Factory is called each time resolve() is called.
        """
        cls._providers[interface] = factory

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """
        Resolve an interface to its implementation.

        Raises:
            KeyError: If no implementation is registered for the interface
        """
        if interface in cls._instances:
            return cls._instances[interface]
        if interface in cls._providers:
            return cls._providers[interface]()
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def is_registered(cls, interface: Type[T]) -> bool:
        return interface in cls._instances or interface in cls._providers

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()
        cls._providers.clear()
        cls._initialized = False

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def _mark_initialized(cls) -> None:
        cls._initialized = True


def bootstrap_container() -> None:
    """
    Initialize the dependency injection container.

    Registers all interface implementations:
    - IAIProvider -> OpenAIProvider (singleton, credential from Settings)
    - TranscriptionService (singleton over the resolved provider)
    - AnalysisService, SpeakerLabeler, DiagnosticService (factories)

    This function is idempotent - calling it multiple times has no effect
    after the first successful initialization.
    """
    if Container.is_initialized():
        return

    logger.info("Bootstrapping dependency injection container...")

    try:
        from interfaces.ai_provider import IAIProvider
        from infrastructure.openai.client import get_openai_provider
        from services.analysis import AnalysisService
        from services.diagnostics import DiagnosticService
        from services.speaker_labeling import SpeakerLabeler
        from services.transcription import TranscriptionService

        Container.register_factory(IAIProvider, get_openai_provider)
        logger.info("Registered IAIProvider -> OpenAIProvider (factory)")

        Container.register_factory(
            AnalysisService, lambda: AnalysisService(Container.resolve(IAIProvider))
        )
        Container.register_factory(
            SpeakerLabeler, lambda: SpeakerLabeler(Container.resolve(IAIProvider))
        )
        # Singleton
        Container.register(
            TranscriptionService,
            TranscriptionService(
                provider=Container.resolve(IAIProvider),
                speaker_labeler=Container.resolve(SpeakerLabeler),
            ),
        )
        logger.info("Registered TranscriptionService (singleton)")
        Container.register_factory(
            DiagnosticService, lambda: DiagnosticService(Container.resolve(IAIProvider))
        )
        logger.info("Registered relay services with DI (factory)")

        Container._mark_initialized()
        logger.info("Dependency injection container bootstrapped successfully")

    except Exception as e:
        logger.error(f"Failed to bootstrap container: {e}")
        logger.exception("Container bootstrap error details:")
        raise


def _resolve(interface: Type[T]) -> T:
    if not Container.is_initialized():
        bootstrap_container()
    return Container.resolve(interface)


def get_ai_provider():
    """Get IAIProvider implementation from container."""
    from interfaces.ai_provider import IAIProvider

    return _resolve(IAIProvider)


def get_analysis_service():
    """Get AnalysisService from container."""
    from services.analysis import AnalysisService

    return _resolve(AnalysisService)


def get_transcription_service():
    """Get TranscriptionService from container."""
    from services.transcription import TranscriptionService

    return _resolve(TranscriptionService)


def get_diagnostic_service():
    """Get DiagnosticService from container."""
    from services.diagnostics import DiagnosticService

    return _resolve(DiagnosticService)
