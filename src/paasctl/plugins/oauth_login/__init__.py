"""Browser-based OAuth login flow.

Implements the ``external`` scheme (announced by servers as ``oauth``):
the user's browser is sent to the provider's authorize URL, the
authorization code is captured on a local callback server and exchanged
for a session token at ``POST /auth/login``.

See Also:
    :class:`~paasctl.plugins.oauth_login.plugin.OAuthLoginFlow`
"""

from paasctl.plugins.oauth_login.plugin import OAuthLoginFlow

__all__ = ["OAuthLoginFlow"]
