from nftcontracting.db.encoder import encode, decode
from nftcontracting.exceptions import DatabaseDriverNotFound
from nftcontracting.logger import get_logger
from nftcontracting import config
import pymongo
import re

log = get_logger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        value = self.db.get(key)
        return decode(value)

    def set(self, key: str, value):
        k = key.encode()
        if value is None:
            self.__delitem__(key)
        else:
            v = encode(value).encode()
            self.db[k] = v

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.DB_URL, db=config.DB_NAME, collection=config.DB_COLLECTION):
        log.debug(f'Using MongoDB collection {db}.{collection}')
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]
        self.db.create_index('rawKey', unique=True)

    def get(self, item: str):
        v = self.db.find_one({'rawKey': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db.update_one({'rawKey': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        cur = self.db.find({'rawKey': {'$regex': '^' + re.escape(prefix)}})

        keys = []
        for entry in cur.sort('rawKey', pymongo.ASCENDING):
            keys.append(entry['rawKey'])
            if 0 < length <= len(keys):
                break

        return keys

    def keys(self):
        k = []
        for entry in self.db.find({}):
            k.append(entry['rawKey'])
        k.sort()
        return k

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.db.delete_one({'rawKey': key})


DRIVERS = {
    'memory': InMemDriver,
    'mongo': MongoDriver
}


def get_driver(db_type=config.DB_TYPE):
    driver = DRIVERS.get(db_type)
    if driver is None:
        raise DatabaseDriverNotFound(driver=db_type, known_drivers=list(DRIVERS.keys()))
    return driver()


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L2 cache
        self.cache = {}  # L1 cache
        self.driver = driver or get_driver()  # L0 cache

        self.pending_reads = {}

    def find(self, key: str):
        # A pending None is a pending delete and must shadow the lower layers
        if key in self.pending_writes:
            return self.pending_writes[key]

        value = self.cache.get(key)
        if value is not None:
            return value

        value = self.driver.get(key)
        if value is not None:
            self.cache[key] = value

        return value

    def get(self, key: str):
        value = self.find(key)

        if key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
                self.cache.pop(k, None)
            else:
                self.driver.set(k, v)
                self.cache[k] = v

        self.pending_writes.clear()
        self.pending_reads = {}

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.cache.clear()
        self.pending_reads = {}
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()

    def snapshot(self):
        return dict(self.pending_writes)

    def restore(self, snapshot: dict):
        # Drops every pending write made since the snapshot was taken
        self.pending_writes = dict(snapshot)
        self.pending_reads = {}


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        for k, v in self.cache.items():
            if k.startswith(prefix) and k not in keys:
                _items[k] = v
                keys.add(k)

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.get(k)  # Cache get will add the keys to the cache

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=()):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
