"""Built-in login flows for paasctl.

Each sub-package provides one :class:`~paasctl.auth.base.LoginFlow`
implementation:

- :mod:`~paasctl.plugins.native_login` -- email and password.
- :mod:`~paasctl.plugins.oauth_login` -- browser login with a local
  callback server.

Flows are wired together by
:func:`~paasctl.auth.manager.create_default_manager`.
"""
