"""
Catalog package for the shoe store API.

This package holds the pieces behind ``/api/shoes``: the pydantic schemas,
the in-memory ``ShoeRepository``, the ``ShoeAdapter`` that validates
requests and shapes responses, and the FastAPI router that wires them to
URLs. The repository is created by the application factory in
``shoestore.main`` and shared by all requests.
"""

from .router import router as catalog_router  # noqa: F401
from .store import ShoeRepository  # noqa: F401
