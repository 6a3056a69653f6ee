"""Email and password login flow.

Implements the ``native`` scheme: the password is read from the terminal
and exchanged for a session token at ``POST /users/{email}/tokens``.

See Also:
    :class:`~paasctl.plugins.native_login.plugin.NativeLoginFlow`
"""

from paasctl.plugins.native_login.plugin import NativeLoginFlow

__all__ = ["NativeLoginFlow"]
