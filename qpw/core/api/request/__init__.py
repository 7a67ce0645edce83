"""Request building and response adaptation."""
from .request_builder import RequestBuilder, encode_query
from .response_handler import ResponseHandler, PageResult, default_page_adapter

__all__ = [
    'RequestBuilder',
    'encode_query',
    'ResponseHandler',
    'PageResult',
    'default_page_adapter',
]
