from nftcontracting.nft.expiration import BlockInfo
from nftcontracting.nft.identity import IdentityValidator


class Context:
    """
    Per operation view of who is calling and when. Built once by the executor and handed to the handler, so every
    expiration check in an operation sees the same block.
    """
    def __init__(self, caller, block: BlockInfo, this, signer=None, api=None):
        self._state = {
            'caller': caller,
            'signer': signer or caller,
            'this': this,
            'block': block
        }
        self.api = api or IdentityValidator()

    @property
    def this(self):
        return self._state['this']

    @property
    def caller(self):
        return self._state['caller']

    @property
    def signer(self):
        return self._state['signer']

    @property
    def block(self):
        return self._state['block']


class Response:
    def __init__(self):
        self.attributes = []
        self.messages = []

    def add_attribute(self, key, value):
        self.attributes.append((key, value))
        return self

    def add_message(self, message: dict):
        self.messages.append(message)
        return self

    def attribute(self, key):
        for k, v in self.attributes:
            if k == key:
                return v
        return None

    def to_dict(self):
        return {
            'attributes': dict(self.attributes),
            'messages': list(self.messages)
        }

    def __repr__(self):
        return 'Response(attributes={}, messages={})'.format(self.attributes, self.messages)
