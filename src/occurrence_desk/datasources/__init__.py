"""External data source integrations.

Each subdirectory is one backend with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # Base URL, auth, error mapping
    └── {resource}.py     # Fetch functions (one per endpoint/concept)

Adding an endpoint
------------------
1. Add a function to the resource module that takes an ``ApiClient`` and
   returns a model from ``schemas.py``::

       def fetch_something(api: ApiClient, page: int) -> SomethingPage:
           return SomethingPage.model_validate(api.get("/something", params={...}))

2. Re-export it in ``__init__.py`` with ``__all__``.

3. Add tests in ``tests/test_api_{resource}.py`` mocking ``session.request``.
"""
