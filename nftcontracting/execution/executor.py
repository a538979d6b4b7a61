from nftcontracting.db.driver import ContractDriver
from nftcontracting.execution.runtime import Context
from nftcontracting.nft.contract import EXPORTS
from nftcontracting.nft.expiration import BlockInfo
from nftcontracting.nft.identity import IdentityValidator
from nftcontracting.nft.receiver import LogNotifier
from nftcontracting.nft.state import NFTState
from nftcontracting.logger import get_logger
from nftcontracting import config
from copy import deepcopy
import traceback

log = get_logger('NFT')


class Executor:
    def __init__(self, driver=None, contract=config.CONTRACT_NAME, notifier=None, validator=None):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.contract = contract
        self.notifier = notifier or LogNotifier()
        self.validator = validator or IdentityValidator()

        self.state = NFTState(driver=self.driver, contract=self.contract)

    def context(self, sender, environment: dict):
        return Context(caller=self.validator.validate(sender),
                       block=BlockInfo.from_environment(environment),
                       this=self.contract,
                       api=self.validator)

    def execute(self, sender, function_name, kwargs, environment=None, auto_commit=True) -> dict:
        assert not function_name.startswith(config.PRIVATE_METHOD_PREFIX), 'Private method not callable.'

        func = EXPORTS.get(function_name)
        assert func is not None, 'Function {} does not exist on {}.'.format(function_name, self.contract)

        snapshot = self.driver.snapshot()
        messages = []
        writes = {}

        try:
            ctx = self.context(sender, environment or {})

            log.debug('{} calling {}.{} at {}'.format(ctx.caller, self.contract, function_name, ctx.block))

            result = func(self.state, ctx, **kwargs)
            status_code = 0

            messages = list(result.messages)
            writes = deepcopy(self.driver.pending_writes)

            if auto_commit:
                self.driver.commit()

        except Exception as e:
            result = e
            status_code = 1

            log.error(str(e))
            log.debug(traceback.format_exc())

            # No write of a failed operation may survive
            self.driver.restore(snapshot)

        if status_code == 0 and auto_commit:
            self.dispatch(messages)

        return {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'messages': messages
        }

    def dispatch(self, messages):
        # Delivery is fire and forget. A failing receiver never affects committed state.
        for message in messages:
            try:
                self.notifier.notify(message)
            except Exception as e:
                log.error('Could not deliver {} to {}: {}'.format(message['function'], message['contract'], e))
