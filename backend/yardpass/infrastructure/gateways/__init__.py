from .http_pass_gateway import HttpPassGateway

__all__ = ["HttpPassGateway"]
