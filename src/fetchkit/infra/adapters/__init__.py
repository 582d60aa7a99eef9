"""
Concrete resource fetcher adapters (HTTP, local filesystem, etc.).

Important: keep this package import side-effect free.
Do not import adapter modules here.
"""
__all__: list[str] = []
