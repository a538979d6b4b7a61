from nftcontracting.execution.runtime import Context, Response
from nftcontracting.nft.state import NFTState, TokenInfo, Approval
from nftcontracting.nft.expiration import Expiration
from nftcontracting.nft.auth import check_can_approve, check_can_send
from nftcontracting.nft.receiver import ReceiveMsg
from nftcontracting.exceptions import Unauthorized, Expired

EXPORTS = {}


def export(f):
    EXPORTS[f.__name__] = f
    return f


def _validate_token_id(token_id):
    assert isinstance(token_id, str) and token_id != '', 'Token id must be a non-empty string. Got {}.'.format(
        token_id
    )


def instantiate(state: NFTState, ctx: Context, name, symbol, minter):
    assert state.minter.get() is None, 'Contract already instantiated.'

    minter = ctx.api.validate(minter)

    state.contract_info.set({'name': name, 'symbol': symbol})
    state.minter.set(minter)

    return Response() \
        .add_attribute('action', 'instantiate') \
        .add_attribute('minter', minter)


@export
def mint(state: NFTState, ctx: Context, token_id, owner, token_uri=None, extension=None):
    _validate_token_id(token_id)

    if ctx.caller != state.minter.get():
        raise Unauthorized(sender=ctx.caller, token_id=token_id)

    token = TokenInfo(owner=ctx.api.validate(owner),
                      approvals=[],
                      token_uri=token_uri,
                      extension=extension)

    state.tokens.create(token_id, token)
    state.token_count.increment()

    return Response() \
        .add_attribute('action', 'mint') \
        .add_attribute('minter', ctx.caller) \
        .add_attribute('owner', token.owner) \
        .add_attribute('token_id', token_id)


@export
def transfer_nft(state: NFTState, ctx: Context, recipient, token_id):
    token = _transfer_nft(state, ctx, recipient, token_id)

    return Response() \
        .add_attribute('action', 'transfer') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('recipient', token.owner) \
        .add_attribute('token_id', token_id)


@export
def send_nft(state: NFTState, ctx: Context, contract, token_id, msg=None):
    token = _transfer_nft(state, ctx, contract, token_id)

    send = ReceiveMsg(sender=ctx.caller, token_id=token_id, msg=msg)

    return Response() \
        .add_message(send.into_message(token.owner)) \
        .add_attribute('action', 'send') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('recipient', token.owner) \
        .add_attribute('token_id', token_id)


@export
def approve(state: NFTState, ctx: Context, spender, token_id, expires=None):
    token = _update_approvals(state, ctx, spender, token_id, True, expires)

    return Response() \
        .add_attribute('action', 'approve') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('spender', token.approvals[-1].spender) \
        .add_attribute('token_id', token_id)


@export
def revoke(state: NFTState, ctx: Context, spender, token_id):
    _update_approvals(state, ctx, spender, token_id, False, None)

    return Response() \
        .add_attribute('action', 'revoke') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('spender', spender) \
        .add_attribute('token_id', token_id)


@export
def approve_all(state: NFTState, ctx: Context, operator, expires=None):
    # reject expired data as invalid
    expires = Expiration.parse(expires)
    if expires.is_expired(ctx.block):
        raise Expired(target=operator)

    operator = ctx.api.validate(operator)
    state.operators.save(ctx.caller, operator, expires)

    return Response() \
        .add_attribute('action', 'approve_all') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('operator', operator)


@export
def revoke_all(state: NFTState, ctx: Context, operator):
    operator = ctx.api.validate(operator)
    state.operators.remove(ctx.caller, operator)

    return Response() \
        .add_attribute('action', 'revoke_all') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('operator', operator)


@export
def burn(state: NFTState, ctx: Context, token_id):
    _validate_token_id(token_id)

    token = state.tokens.get(token_id)
    check_can_send(ctx.caller, token, state.operators, ctx.block, token_id=token_id)

    state.tokens.delete(token_id)
    state.token_count.decrement()

    return Response() \
        .add_attribute('action', 'burn') \
        .add_attribute('sender', ctx.caller) \
        .add_attribute('token_id', token_id)


def _transfer_nft(state: NFTState, ctx: Context, recipient, token_id):
    _validate_token_id(token_id)

    token = state.tokens.get(token_id)
    check_can_send(ctx.caller, token, state.operators, ctx.block, token_id=token_id)

    # set owner and remove existing approvals
    token.owner = ctx.api.validate(recipient)
    token.approvals = []

    state.tokens.replace(token_id, token)
    return token


def _update_approvals(state: NFTState, ctx: Context, spender, token_id, add, expires):
    _validate_token_id(token_id)

    token = state.tokens.get(token_id)
    check_can_approve(ctx.caller, token, state.operators, ctx.block, token_id=token_id)

    # remove any approval for the same spender before adding
    spender = ctx.api.validate(spender)
    approvals = [a for a in token.approvals if a.spender != spender]

    if not add and len(approvals) == len(token.approvals):
        return token

    token.approvals = approvals

    if add:
        # reject expired data as invalid
        expires = Expiration.parse(expires)
        if expires.is_expired(ctx.block):
            raise Expired(target=spender)

        token.approvals.append(Approval(spender=spender, expires=expires))

    state.tokens.replace(token_id, token)
    return token
