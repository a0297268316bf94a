"""HTTP/1.1 request parsing, response writing, routing and a worker thread pool."""

__version__ = "0.1.0"
__all__ = ["request", "response", "web", "worker_pool"]