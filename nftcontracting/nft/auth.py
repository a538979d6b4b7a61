from nftcontracting.nft.expiration import BlockInfo
from nftcontracting.nft.state import TokenInfo, OperatorRegistry
from nftcontracting.exceptions import Unauthorized


def _has_operator_grant(sender, token: TokenInfo, operators: OperatorRegistry, block: BlockInfo):
    expires = operators.may_load(token.owner, sender)
    if expires is None:
        return False
    return not expires.is_expired(block)


def can_approve(sender, token: TokenInfo, operators: OperatorRegistry, block: BlockInfo):
    # owner can approve
    if token.owner == sender:
        return True

    # operator can approve
    return _has_operator_grant(sender, token, operators, block)


def can_send(sender, token: TokenInfo, operators: OperatorRegistry, block: BlockInfo):
    # owner can send
    if token.owner == sender:
        return True

    # any non-expired token approval can send
    if any(a.spender == sender and not a.is_expired(block) for a in token.approvals):
        return True

    # operator can send
    return _has_operator_grant(sender, token, operators, block)


def check_can_approve(sender, token: TokenInfo, operators: OperatorRegistry, block: BlockInfo, token_id=None):
    if not can_approve(sender, token, operators, block):
        raise Unauthorized(sender=sender, token_id=token_id)


def check_can_send(sender, token: TokenInfo, operators: OperatorRegistry, block: BlockInfo, token_id=None):
    if not can_send(sender, token, operators, block):
        raise Unauthorized(sender=sender, token_id=token_id)
