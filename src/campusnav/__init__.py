"""
campusnav - Campus Navigation Directory
=========================================

Given a classroom name, campusnav returns its description and the encoded
images that show how to get there; with no name, it lists every classroom.

Layers (top to bottom):
    1. Transport       - FastAPI app (campusnav.api), uvicorn entry point
    2. Service         - DirectoryService: one lock around the directory
    3. Directory       - NavigationDirectory: reload and read-time join
    4. Infrastructure  - ImageStore, ClassroomStore, DocumentStore backends

Quick Start:
    >>> from campusnav import DirectoryService
    >>> async with DirectoryService() as service:
    ...     await service.initialize(classrooms_json, images_json)
    ...     resolved = await service.get_classroom("UK3 104")
"""

__version__ = "0.1.0"

from campusnav.service import DirectoryService

__all__ = ["DirectoryService", "__version__"]
