import json
import decimal
from nftcontracting.stdlib.bridge.time import Datetime
from nftcontracting.nft.expiration import Expiration

MONGO_MIN_INT = -(2 ** 63)
MONGO_MAX_INT = 2 ** 63 - 1

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# Datetimes, expirations and other non-JSON values are stored as single-key dicts tagged with a dunder name and
# restored in as_object on the way out.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, Datetime):
            return {
                '__time__': [o.year, o.month, o.day, o.hour, o.minute, o.second, o.microsecond]
            }
        elif isinstance(o, Expiration):
            return {
                '__expiration__': [o.kind, o.value]
            }
        elif isinstance(o, bytes):
            return {
                '__bytes__': o.hex()
            }
        elif isinstance(o, decimal.Decimal):
            return {
                '__fixed__': str(o)
            }
        return super().default(o)


def encode_int(value: int):
    if MONGO_MIN_INT < value < MONGO_MAX_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints_in_list(data: list):
    l = []
    for i in data:
        if isinstance(i, dict):
            l.append(encode_ints_in_dict(i))
        elif isinstance(i, list):
            l.append(encode_ints_in_list(i))
        elif isinstance(i, int) and not isinstance(i, bool):
            l.append(encode_int(i))
        else:
            l.append(i)
    return l


def encode_ints_in_dict(data: dict):
    d = dict()
    for k, v in data.items():
        if isinstance(v, int) and not isinstance(v, bool):
            d[k] = encode_int(v)
        elif isinstance(v, dict):
            d[k] = encode_ints_in_dict(v)
        elif isinstance(v, list):
            d[k] = encode_ints_in_list(v)
        else:
            d[k] = v

    return d


# JSON library from Python 3 doesn't let you instantiate your custom Encoder. You have to pass it as an obj to json
def encode(data):
    """ NOTE:
    Normally encoding behavior is overriden in 'default' method inside
    a class derived from json.JSONEncoder. Unfortunately this can be done only
    for custom types.

    Due to MongoDB integer limitation (8 bytes), we need to preprocess 'big' integers.
    """
    if isinstance(data, int) and not isinstance(data, bool):
        data = encode_int(data)
    elif isinstance(data, dict):
        data = encode_ints_in_dict(data)
    elif isinstance(data, list):
        data = encode_ints_in_list(data)

    return json.dumps(data, cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__time__' in d:
        return Datetime(*d['__time__'])
    elif '__expiration__' in d:
        kind, value = d['__expiration__']
        return Expiration(kind, value)
    elif '__bytes__' in d:
        return bytes.fromhex(d['__bytes__'])
    elif '__fixed__' in d:
        return decimal.Decimal(d['__fixed__'])
    elif '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
# This is not uniform, but this is how Python made it.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
