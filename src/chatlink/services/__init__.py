"""
chatlink.services
Services composing the server bootstrap: history repository, credential extractor,
certificate selector, the bootstrap controller and the onboarding entry flow.
"""

from .history import ServerHistoryRepository  # noqa: F401
from .credentials import CredentialExtractor  # noqa: F401
from .certificates import CertificateSelector  # noqa: F401
from .bootstrap import BootstrapController, build_controller  # noqa: F401
from .onboarding import OnboardingFlow  # noqa: F401

__all__ = [
    "BootstrapController",
    "CertificateSelector",
    "CredentialExtractor",
    "OnboardingFlow",
    "ServerHistoryRepository",
    "build_controller",
]
