from nftcontracting.exceptions import InvalidIdentity
from nftcontracting import config


class IdentityValidator:
    """
    Default address validator. Signatures are checked upstream; this only guarantees that an identity is a
    well-formed key before it is written into state.
    """
    def __init__(self, max_size=config.MAX_IDENTITY_SIZE):
        self.max_size = max_size

    def validate(self, raw):
        if not isinstance(raw, str) or raw == '':
            raise InvalidIdentity(identity=raw)

        if raw != raw.strip() or any(c.isspace() for c in raw):
            raise InvalidIdentity(identity=raw)

        if config.DELIMITER in raw or config.INDEX_SEPARATOR in raw:
            raise InvalidIdentity(identity=raw)

        if len(raw) > self.max_size:
            raise InvalidIdentity(identity=raw)

        return raw

    def __call__(self, raw):
        return self.validate(raw)
