from nftcontracting.db.encoder import encode
from nftcontracting.logger import get_logger
from nftcontracting import config

log = get_logger('Receiver')


class ReceiveMsg:
    """
    Notification handed to the contract a token was sent to. The receiving contract is expected to expose a
    receive_nft function taking these fields.
    """
    def __init__(self, sender, token_id, msg=None):
        self.sender = sender
        self.token_id = token_id
        self.msg = msg

    def to_dict(self):
        return {
            'sender': self.sender,
            'token_id': self.token_id,
            'msg': self.msg
        }

    def into_binary(self):
        return encode({config.RECEIVE_FUNCTION_NAME: self.to_dict()}).encode()

    def into_message(self, contract):
        return {
            'contract': contract,
            'function': config.RECEIVE_FUNCTION_NAME,
            'kwargs': self.to_dict()
        }


class Notifier:
    """Receives outbound messages once their operation has committed. Delivery is out of our hands."""
    def notify(self, message: dict):
        raise NotImplementedError


class LogNotifier(Notifier):
    def notify(self, message: dict):
        log.info('Outbound {} to {} for token {}'.format(
            message['function'], message['contract'], message['kwargs']['token_id']
        ))


class QueueNotifier(Notifier):
    def __init__(self):
        self.messages = []

    def notify(self, message: dict):
        self.messages.append(message)
