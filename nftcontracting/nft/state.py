from nftcontracting.db.driver import ContractDriver
from nftcontracting.db.orm import Variable, Hash
from nftcontracting.nft.expiration import Expiration, BlockInfo
from nftcontracting.exceptions import NotFound, AlreadyExists
from nftcontracting import config


class Approval:
    def __init__(self, spender: str, expires: Expiration = None):
        self.spender = spender
        self.expires = expires or Expiration.never()

    def is_expired(self, block: BlockInfo):
        return self.expires.is_expired(block)

    def to_dict(self):
        return {
            'spender': self.spender,
            'expires': self.expires
        }

    @classmethod
    def from_dict(cls, d: dict):
        return cls(spender=d['spender'], expires=d['expires'])

    def __eq__(self, other):
        if not isinstance(other, Approval):
            return False
        return self.spender == other.spender and self.expires == other.expires

    def __repr__(self):
        return 'Approval(spender={}, expires={})'.format(self.spender, self.expires)


class TokenInfo:
    """
    Stored for each token. Approvals live inside the record since they are cleared on every transfer and cannot
    accumulate much. The extension is any JSON encodable payload and is never inspected.
    """
    def __init__(self, owner: str, approvals=None, token_uri=None, extension=None):
        self.owner = owner
        self.approvals = list(approvals) if approvals is not None else []
        self.token_uri = token_uri
        self.extension = extension

    def to_dict(self):
        return {
            'owner': self.owner,
            'approvals': [a.to_dict() for a in self.approvals],
            'token_uri': self.token_uri,
            'extension': self.extension
        }

    @classmethod
    def from_dict(cls, d: dict):
        return cls(owner=d['owner'],
                   approvals=[Approval.from_dict(a) for a in d.get('approvals', [])],
                   token_uri=d.get('token_uri'),
                   extension=d.get('extension'))

    def __eq__(self, other):
        if not isinstance(other, TokenInfo):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return 'TokenInfo(owner={}, approvals={}, token_uri={}, extension={})'.format(
            self.owner, self.approvals, self.token_uri, self.extension
        )


def encode_token_id(token_id: str):
    # Token ids are opaque. Hex keeps delimiters and separators out of storage keys.
    return token_id.encode().hex()


def decode_token_id(key: str):
    return bytes.fromhex(key).decode()


class TokenStore:
    """
    Primary map of token id to TokenInfo plus the derived owner index. The index is written next to every owner
    change and is never read to decide who owns a token. Both are keyed by the hex form of the token id.
    """
    def __init__(self, contract, driver: ContractDriver,
                 tokens_key=config.TOKENS_KEY, owner_key=config.TOKENS_OWNER_KEY):
        self.tokens = Hash(contract, tokens_key, driver=driver)
        self.owners = Hash(contract, owner_key, driver=driver)

    def _load(self, key):
        raw = self.tokens[key]
        if raw is None:
            return None
        return TokenInfo.from_dict(raw)

    def may_load(self, token_id):
        return self._load(encode_token_id(token_id))

    def get(self, token_id):
        token = self.may_load(token_id)
        if token is None:
            raise NotFound(token_id=token_id)
        return token

    def create(self, token_id, token: TokenInfo):
        key = encode_token_id(token_id)

        if self.tokens[key] is not None:
            raise AlreadyExists(token_id=token_id)

        self.tokens[key] = token.to_dict()
        self.owners[token.owner, key] = True

    def replace(self, token_id, token: TokenInfo):
        old = self.get(token_id)
        key = encode_token_id(token_id)

        self.tokens[key] = token.to_dict()

        if old.owner != token.owner:
            del self.owners[old.owner, key]
            self.owners[token.owner, key] = True

    def delete(self, token_id):
        old = self.get(token_id)
        key = encode_token_id(token_id)

        del self.tokens[key]
        del self.owners[old.owner, key]

    def tokens_of(self, owner):
        return sorted(decode_token_id(k) for k in self.owners.subkeys(owner))

    def all_token_ids(self):
        return sorted(decode_token_id(k) for k in self.tokens.subkeys())

    def rebuild_index(self):
        self.owners.clear()
        for key in self.tokens.subkeys():
            self.owners[self._load(key).owner, key] = True


class OperatorRegistry:
    """(owner, operator) -> Expiration. Grants the operator rights over every token the owner holds."""
    def __init__(self, contract, driver: ContractDriver, operator_key=config.OPERATORS_KEY):
        self.operators = Hash(contract, operator_key, driver=driver)

    def may_load(self, owner, operator):
        return self.operators[owner, operator]

    def save(self, owner, operator, expires: Expiration):
        self.operators[owner, operator] = expires

    def remove(self, owner, operator):
        if self.operators[owner, operator] is not None:
            del self.operators[owner, operator]


class SupplyCounter:
    def __init__(self, contract, driver: ContractDriver, token_count_key=config.TOKEN_COUNT_KEY):
        self.count = Variable(contract, token_count_key, driver=driver, default_value=0)

    def get(self):
        return self.count.get()

    def increment(self):
        value = self.get() + 1
        self.count.set(value)
        return value

    def decrement(self):
        value = self.get() - 1
        assert value >= 0, 'Token count cannot go below zero.'
        self.count.set(value)
        return value


class NFTState:
    """
    Everything the handlers read or write, bundled so it can be passed explicitly. Backed by a single
    ContractDriver so one commit or rollback covers every write of an operation.
    """
    def __init__(self, driver: ContractDriver, contract=config.CONTRACT_NAME):
        self.contract = contract
        self.driver = driver

        self.contract_info = Variable(contract, config.CONTRACT_INFO_KEY, driver=driver)
        self.minter = Variable(contract, config.MINTER_KEY, driver=driver, t=str)

        self.tokens = TokenStore(contract, driver)
        self.operators = OperatorRegistry(contract, driver)
        self.token_count = SupplyCounter(contract, driver)
