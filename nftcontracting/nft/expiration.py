from nftcontracting.stdlib.bridge.time import Datetime

NEVER = 'never'
AT_HEIGHT = 'at_height'
AT_TIME = 'at_time'

KINDS = {NEVER, AT_HEIGHT, AT_TIME}


class BlockInfo:
    """
    The logical clock an operation is evaluated against. One BlockInfo is built per operation and every expiration
    comparison inside that operation uses it.
    """
    def __init__(self, height: int, time: Datetime):
        self.height = height
        self.time = time

    @classmethod
    def from_environment(cls, environment: dict):
        height = environment.get('block_num')
        now = environment.get('now')

        assert isinstance(height, int), 'Block height must be provided as an int. Got {}.'.format(height)

        if isinstance(now, str):
            now = Datetime.from_iso(now)

        assert isinstance(now, Datetime), 'Block time must be provided as a Datetime. Got {}.'.format(now)

        return cls(height=height, time=now)

    def __repr__(self):
        return 'BlockInfo(height={}, time={})'.format(self.height, self.time)


class Expiration:
    def __init__(self, kind=NEVER, value=None):
        assert kind in KINDS, 'Unknown expiration kind {}.'.format(kind)

        if kind == AT_HEIGHT:
            assert isinstance(value, int) and not isinstance(value, bool), 'Height must be an int.'
        elif kind == AT_TIME:
            if isinstance(value, str):
                value = Datetime.from_iso(value)
            assert isinstance(value, Datetime), 'Time must be a Datetime.'
        else:
            value = None

        self.kind = kind
        self.value = value

    @classmethod
    def never(cls):
        return cls(NEVER)

    @classmethod
    def at_height(cls, height):
        return cls(AT_HEIGHT, height)

    @classmethod
    def at_time(cls, time):
        return cls(AT_TIME, time)

    @classmethod
    def parse(cls, raw):
        # Accepts an Expiration, None (never) or the wire form {'at_height': 100}, {'at_time': '...'}, {'never': {}}
        if raw is None:
            return cls.never()

        if isinstance(raw, Expiration):
            return raw

        assert isinstance(raw, dict) and len(raw) == 1, 'Malformed expiration {}.'.format(raw)

        kind, value = next(iter(raw.items()))
        return cls(kind, value)

    def is_expired(self, block: BlockInfo):
        if self.kind == AT_HEIGHT:
            return block.height >= self.value
        elif self.kind == AT_TIME:
            return block.time >= self.value
        return False

    def to_dict(self):
        if self.kind == NEVER:
            return {NEVER: {}}
        return {self.kind: self.value}

    def __eq__(self, other):
        if not isinstance(other, Expiration):
            return False
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.kind == NEVER:
            return 'Expiration(never)'
        return 'Expiration({}={})'.format(self.kind, self.value)
