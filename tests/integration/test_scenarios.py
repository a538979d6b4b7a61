from unittest import TestCase
from nftcontracting.client import NFTClient
from nftcontracting.db.driver import ContractDriver, InMemDriver
from nftcontracting.nft.expiration import Expiration
from nftcontracting.stdlib.bridge.time import Datetime
from nftcontracting.exceptions import Unauthorized, AlreadyExists, Expired

MINTER = 'minter'
NOW = Datetime(2021, 6, 1)


class TestScenarios(TestCase):
    def setUp(self):
        self.raw_driver = InMemDriver()
        self.client = NFTClient(signer=MINTER,
                                driver=ContractDriver(driver=self.raw_driver),
                                environment={'block_num': 1, 'now': NOW})
        self.client.instantiate(name='Starships', symbol='SHIP')

    def tearDown(self):
        self.client.flush()

    def as_(self, signer):
        return self.client.get_contract(signer=signer)

    def record(self, token_id):
        return self.client.nft_info(token_id)

    def test_1_mint(self):
        self.as_(MINTER).mint(token_id='1', owner='alice')

        self.assertEqual(self.client.num_tokens(), 1)
        self.assertEqual(self.record('1').owner, 'alice')
        self.assertListEqual(self.record('1').approvals, [])

    def test_2_approved_transfer_before_expiry(self):
        self.as_(MINTER).mint(token_id='1', owner='alice')
        self.as_('alice').approve(spender='bob', token_id='1', expires=Expiration.at_height(100))

        res = self.as_('bob').transfer_nft(recipient='carol', token_id='1', block_num=50)

        self.assertEqual(res.attribute('sender'), 'bob')
        self.assertEqual(self.record('1').owner, 'carol')
        self.assertListEqual(self.record('1').approvals, [])

    def test_3_approved_transfer_after_expiry(self):
        self.as_(MINTER).mint(token_id='1', owner='alice')
        self.as_('alice').approve(spender='bob', token_id='1', expires=Expiration.at_height(100))

        with self.assertRaises(Unauthorized):
            self.as_('bob').transfer_nft(recipient='carol', token_id='1', block_num=150)

        self.assertEqual(self.record('1').owner, 'alice')

    def test_4_operator_transfer(self):
        self.as_(MINTER).mint(token_id='1', owner='alice')
        self.as_('alice').approve_all(operator='dave', expires=Expiration.never())

        self.as_('dave').transfer_nft(recipient='eve', token_id='1')

        self.assertEqual(self.record('1').owner, 'eve')

    def test_5_burn_and_remint(self):
        self.as_(MINTER).mint(token_id='1', owner='alice')
        self.as_('alice').transfer_nft(recipient='carol', token_id='1')

        self.as_('carol').burn(token_id='1')

        self.assertEqual(self.client.num_tokens(), 0)
        self.assertIsNone(self.record('1'))

        self.as_(MINTER).mint(token_id='1', owner='frank')
        self.assertEqual(self.record('1').owner, 'frank')
        self.assertEqual(self.client.num_tokens(), 1)


class TestProperties(TestCase):
    def setUp(self):
        self.raw_driver = InMemDriver()
        self.client = NFTClient(signer=MINTER,
                                driver=ContractDriver(driver=self.raw_driver),
                                environment={'block_num': 10, 'now': NOW})
        self.client.instantiate(name='Starships', symbol='SHIP')

        minter = self.client.get_contract()
        for i, owner in enumerate(['alice', 'alice', 'bob', 'carol']):
            minter.mint(token_id=str(i), owner=owner)

    def tearDown(self):
        self.client.flush()

    def as_(self, signer):
        return self.client.get_contract(signer=signer)

    def assert_consistent(self):
        # supply equals live records and every record is indexed under exactly its owner
        token_ids = self.client.all_tokens()
        self.assertEqual(self.client.num_tokens(), len(token_ids))

        indexed = []
        for owner in ('alice', 'bob', 'carol', 'dave', 'eve'):
            for token_id in self.client.tokens(owner):
                self.assertEqual(self.client.owner_of(token_id), owner)
                indexed.append(token_id)

        self.assertListEqual(sorted(indexed), token_ids)

    def test_minting_live_id_fails(self):
        with self.assertRaises(AlreadyExists):
            self.as_(MINTER).mint(token_id='0', owner='eve')

        self.assertEqual(self.client.owner_of('0'), 'alice')
        self.assert_consistent()

    def test_every_transfer_path_clears_approvals(self):
        alice = self.as_('alice')
        alice.approve_all(operator='dave')

        alice.approve(spender='bob', token_id='0')
        alice.approve(spender='carol', token_id='0')
        self.as_('bob').transfer_nft(recipient='eve', token_id='0')
        self.assertListEqual(self.client.approvals('0'), [])

        alice.approve(spender='bob', token_id='1')
        self.as_('dave').send_nft(contract='eve', token_id='1')
        self.assertListEqual(self.client.approvals('1'), [])

        self.assert_consistent()

    def test_expired_grants_leave_store_unchanged(self):
        before = dict(self.raw_driver.db)

        with self.assertRaises(Expired):
            self.as_('alice').approve(spender='bob', token_id='0', expires=Expiration.at_height(10))

        with self.assertRaises(Expired):
            self.as_('alice').approve_all(operator='dave', expires=Expiration.at_time(NOW))

        self.assertDictEqual(dict(self.raw_driver.db), before)

    def test_idempotent_revokes_leave_store_unchanged(self):
        before = dict(self.raw_driver.db)

        self.as_('alice').revoke(spender='bob', token_id='0')
        self.as_('alice').revoke_all(operator='dave')

        self.assertDictEqual(dict(self.raw_driver.db), before)

    def test_burn_decrements_by_one(self):
        self.as_('bob').burn(token_id='2')

        self.assertEqual(self.client.num_tokens(), 3)
        self.assertIsNone(self.client.owner_of('2'))
        self.assert_consistent()

    def test_mixed_sequence_stays_consistent(self):
        self.as_('alice').approve_all(operator='dave')
        self.as_('dave').transfer_nft(recipient='eve', token_id='1')
        self.as_('carol').burn(token_id='3')
        self.as_('bob').send_nft(contract='carol', token_id='2', msg=None)
        self.as_(MINTER).mint(token_id='3', owner='dave')

        with self.assertRaises(Unauthorized):
            self.as_('dave').burn(token_id='1')

        self.assertListEqual(self.client.tokens('alice'), ['0'])
        self.assertListEqual(self.client.tokens('eve'), ['1'])
        self.assertListEqual(self.client.tokens('carol'), ['2'])
        self.assertListEqual(self.client.tokens('dave'), ['3'])
        self.assert_consistent()
