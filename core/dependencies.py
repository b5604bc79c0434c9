"""
FastAPI dependency injection functions for routes.

Tests replace these through ``app.dependency_overrides``.
"""


def get_analysis_service_dependency():
    """
    FastAPI dependency for AnalysisService.

    Usage in routes:
        @router.post("/analyze")
        async def analyze(
            service: AnalysisService = Depends(get_analysis_service_dependency)
        ):
            ...
    """
    from core.container import get_analysis_service

    return get_analysis_service()


def get_transcription_service_dependency():
    """FastAPI dependency for TranscriptionService."""
    from core.container import get_transcription_service

    return get_transcription_service()


def get_diagnostic_service_dependency():
    """FastAPI dependency for DiagnosticService."""
    from core.container import get_diagnostic_service

    return get_diagnostic_service()
