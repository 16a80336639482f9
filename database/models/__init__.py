from .base import Base, JsonDocument
from .application import Application
from .profile import UserProfile, UserExperience, UserEducation
from .usage import AIUsage

__all__ = [
    'Base',
    'JsonDocument',
    'Application',
    'UserProfile',
    'UserExperience',
    'UserEducation',
    'AIUsage',
]
