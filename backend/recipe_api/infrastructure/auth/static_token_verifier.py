"""TokenVerifier backed by a fixed token table from the settings."""

import hmac

from recipe_api.application.interfaces import CurrentUser, TokenVerifier


class StaticTokenVerifier(TokenVerifier):
    """Accepts the tokens configured in ``Settings.auth_tokens`` (token → user name)."""

    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    def verify(self, token: str) -> CurrentUser | None:
        for known, username in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return CurrentUser(username=username)
        return None
