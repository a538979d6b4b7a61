class NFTError(Exception):
    """
    The base exception for nftcontracting. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    :ivar kind: Short name of the error surfaced to callers
    """
    fmt = 'An unspecified error occurred'
    kind = 'Error'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class Unauthorized(NFTError):
    """
    The sender lacks the capability required for the
    requested mutation

    :ivar sender: The identity that attempted the action
    :ivar token_id: The token acted on, if the action names one
    """
    fmt = "Unauthorized: '{sender}' may not perform this action"
    token_fmt = "Unauthorized: '{sender}' may not perform this action on token '{token_id}'"
    kind = 'Unauthorized'

    def __init__(self, sender, token_id=None):
        if token_id is not None:
            self.fmt = self.token_fmt
        super().__init__(sender=sender, token_id=token_id)


class NotFound(NFTError):
    """
    No token record exists under the given id

    :ivar token_id: The id that was looked up
    """
    fmt = "NotFound: token '{token_id}' does not exist"
    kind = 'NotFound'


class AlreadyExists(NFTError):
    """
    Mint target already has a live record

    :ivar token_id: The id that was minted
    """
    fmt = "AlreadyExists: token '{token_id}' already claimed"
    kind = 'AlreadyExists'


class Expired(NFTError):
    """
    A supplied expiration has already elapsed at the
    moment it would take effect

    :ivar target: The spender or operator of the grant
    """
    fmt = "Expired: grant for '{target}' is already expired"
    kind = 'Expired'


class InvalidIdentity(NFTError):
    """
    An identity string failed validation before it
    entered the data model

    :ivar identity: The raw string supplied
    """
    fmt = "InvalidIdentity: '{identity}' is not a valid address"
    kind = 'InvalidIdentity'


class DatabaseDriverNotFound(NFTError):
    """
    Could not find the specified database driver when
    looking for it

    :ivar driver: The name of the database driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
    """
    fmt = "Unknown database driver '{driver}', known drivers '{known_drivers}'"
    kind = 'DatabaseDriverNotFound'
