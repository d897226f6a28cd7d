from .static_token_verifier import StaticTokenVerifier

__all__ = ["StaticTokenVerifier"]
