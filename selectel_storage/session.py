"""
    Session module. Holds the authentication token and its expiry.

    See COPYING for license information
"""


class Session(object):
    """
        Token store for a single client. Expiry is checked lazily when the
        token is about to be used; nothing clears it on a timer.
    """
    def __init__(self, token=None, expires_at=None):
        self.token = token
        self.expires_at = expires_at

    def is_valid(self, now):
        """ True if there is a token and it has not expired at `now`

        @param now: current time in epoch seconds
        """
        return self.valid_token(now) is not None

    def valid_token(self, now):
        """ Returns the token if it has not expired at `now`, else None """
        token, expires_at = self.token, self.expires_at
        if token is None:
            return None
        if expires_at is not None and expires_at <= now:
            return None
        return token

    def set(self, token, expires_at=None):
        self.token = token
        self.expires_at = expires_at

    def clear(self):
        self.token = None
        self.expires_at = None

    def discard(self, token):
        """ Clears the session only if it still holds `token` """
        if self.token == token:
            self.clear()

    def __repr__(self):
        state = 'empty' if self.token is None else 'expires_at=%s' % (self.expires_at, )
        return 'Session(%s)' % (state, )
