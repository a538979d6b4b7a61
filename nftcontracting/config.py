import os

DB_TYPE = os.getenv('DB_TYPE', 'memory')

DB_URL = os.getenv('DB_URL', 'mongodb://localhost:27017')
DB_NAME = 'nftcontracting'
DB_COLLECTION = 'state'

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024
MAX_IDENTITY_SIZE = 128

PRIVATE_METHOD_PREFIX = '_'

# Default name the token contract state is stored under
CONTRACT_NAME = 'cw721'

# State variable names
CONTRACT_INFO_KEY = 'nft_info'
MINTER_KEY = 'minter'
TOKEN_COUNT_KEY = 'num_tokens'
OPERATORS_KEY = 'operators'
TOKENS_KEY = 'tokens'
TOKENS_OWNER_KEY = 'tokens__owner'

RECEIVE_FUNCTION_NAME = 'receive_nft'

LOG_LEVEL = os.getenv('LOG_LEVEL', None)
