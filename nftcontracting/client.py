from nftcontracting.execution.executor import Executor
from nftcontracting.db.driver import ContractDriver
from nftcontracting.nft.contract import EXPORTS, instantiate
from nftcontracting.stdlib.bridge.time import Datetime
from nftcontracting import config
from functools import partial


class AbstractContract:
    def __init__(self, name, signer, environment, executor: Executor, funcs):
        self.name = name
        self.signer = signer
        self.environment = environment or {}
        self.executor = executor
        self.functions = funcs

        # set up virtual functions
        for func in funcs:
            # each function is a partial that allows signer and environment overriding per call
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        executor=self.executor,
                                        func=func,
                                        environment=self.environment))

    def _abstract_function_call(self, signer, executor, func, environment, now=None, block_num=None, **kwargs):
        environment = dict(environment)

        if now is not None:
            environment['now'] = now
        if block_num is not None:
            environment['block_num'] = block_num

        if environment.get('now') is None:
            environment['now'] = Datetime.now()
        if environment.get('block_num') is None:
            environment['block_num'] = 0

        output = executor.execute(sender=signer,
                                  function_name=func,
                                  kwargs=kwargs,
                                  environment=environment)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class NFTClient:
    def __init__(self, signer='sys',
                 driver=None,
                 contract=config.CONTRACT_NAME,
                 notifier=None,
                 validator=None,
                 environment=None):

        self.raw_driver = driver or ContractDriver()
        self.executor = Executor(driver=self.raw_driver, contract=contract, notifier=notifier, validator=validator)
        self.signer = signer
        self.environment = environment or {}

    @property
    def state(self):
        return self.executor.state

    def flush(self):
        self.raw_driver.flush()

    def instantiate(self, name, symbol, minter=None):
        ctx = self.executor.context(self.signer, {'block_num': 0, 'now': Datetime.now()})

        try:
            response = instantiate(self.state, ctx, name=name, symbol=symbol, minter=minter or self.signer)
        except Exception:
            self.raw_driver.clear_pending_state()
            raise

        self.raw_driver.commit()
        return response

    # Returns abstract contract which has partial methods mapped to each exported function.
    def get_contract(self, signer=None, environment=None):
        return AbstractContract(name=self.executor.contract,
                                signer=signer or self.signer,
                                environment=environment if environment is not None else self.environment,
                                executor=self.executor,
                                funcs=sorted(EXPORTS.keys()))

    def contract_info(self):
        return self.state.contract_info.get()

    def minter(self):
        return self.state.minter.get()

    def num_tokens(self):
        return self.state.token_count.get()

    def nft_info(self, token_id):
        return self.state.tokens.may_load(token_id)

    def owner_of(self, token_id):
        token = self.state.tokens.may_load(token_id)
        if token is None:
            return None
        return token.owner

    def approvals(self, token_id):
        return self.state.tokens.get(token_id).approvals

    def tokens(self, owner):
        return self.state.tokens.tokens_of(owner)

    def all_tokens(self):
        return self.state.tokens.all_token_ids()

    def operator(self, owner, operator):
        return self.state.operators.may_load(owner, operator)
