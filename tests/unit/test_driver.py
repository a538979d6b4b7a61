from unittest import TestCase
from nftcontracting.db.driver import InMemDriver, CacheDriver, ContractDriver, get_driver
from nftcontracting.exceptions import DatabaseDriverNotFound
import random


class TestInMemDriver(TestCase):
    # Flush this sucker every test
    def setUp(self):
        self.d = InMemDriver()
        self.d.flush()

    def tearDown(self):
        self.d.flush()

    def test_get_set(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

    def test_set_none_deletes(self):
        self.d.set('b', 'a')
        self.d.set('b', None)

        self.assertIsNone(self.d.get('b'))
        self.assertEqual(self.d.keys(), [])

    def test_delete(self):
        a = 'a'
        self.d.set('b', a)

        b = self.d.get('b')
        self.assertEqual(a, b)

        self.d.delete('b')

        b = self.d.get('b')
        self.assertIsNone(b)

    def test_delete_missing_key_is_noop(self):
        self.d.delete('nothing')
        self.assertIsNone(self.d.get('nothing'))

    def test_iter(self):
        prefix_1_keys = [
            'b77aa343e339bed781c7c2be1267cd597',
            'bc22ede6e6fb4046d78bf2f9d1f8afdb6',
            'b93dbb37d993846d70b8a92779cbfbfe9',
            'be1a2783019de6ea7ef169cc55e48a3ae',
            'b1fe8db32b9185d628f4c346f0455023e',
        ]

        prefix_2_keys = [
            'x37fbab0bd2e60563c79469e5be41e515',
            'x30c6eb2ad176773b5ce6d590d2472dfe',
            'x3d4fc9480f0a07b28aa7646d5066b54d',
            'x387c3d4ab7f0c1c6ef549198fc14b525',
            'x5c74dc83e132e435e8512599e1075bc0',
        ]

        keys = prefix_1_keys + prefix_2_keys
        random.shuffle(keys)

        for k in keys:
            self.d.set(k, k)

        prefix_1_keys.sort()
        prefix_2_keys.sort()

        self.assertListEqual(prefix_1_keys, self.d.iter(prefix='b'))
        self.assertListEqual(prefix_2_keys, self.d.iter(prefix='x'))

    def test_iter_with_length(self):
        for k in ['a1', 'a2', 'a3', 'a4']:
            self.d.set(k, k)

        self.assertListEqual(self.d.iter(prefix='a', length=2), ['a1', 'a2'])

    def test_keys_sorted(self):
        for k in ['c', 'a', 'b']:
            self.d.set(k, 1)

        self.assertListEqual(self.d.keys(), ['a', 'b', 'c'])

    def test_getitem_raises_key_error(self):
        with self.assertRaises(KeyError):
            self.d['missing']

    def test_setitem_getitem(self):
        self.d['x'] = {'a': 1}
        self.assertDictEqual(self.d['x'], {'a': 1})


class TestGetDriver(TestCase):
    def test_memory_driver(self):
        self.assertIsInstance(get_driver('memory'), InMemDriver)

    def test_unknown_driver_raises(self):
        with self.assertRaises(DatabaseDriverNotFound):
            get_driver('redis')


class TestCacheDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.c = CacheDriver(driver=self.raw)

    def test_set_is_pending_until_commit(self):
        self.c.set('a', 1)

        self.assertEqual(self.c.get('a'), 1)
        self.assertIsNone(self.raw.get('a'))

        self.c.commit()

        self.assertEqual(self.raw.get('a'), 1)
        self.assertDictEqual(self.c.pending_writes, {})

    def test_rollback_discards_pending_writes(self):
        self.c.set('a', 1)
        self.c.rollback()

        self.assertIsNone(self.c.get('a'))
        self.assertIsNone(self.raw.get('a'))

    def test_pending_delete_shadows_committed_value(self):
        self.raw.set('a', 1)

        self.c.delete('a')

        self.assertIsNone(self.c.get('a'))
        self.assertEqual(self.raw.get('a'), 1)

        self.c.commit()

        self.assertIsNone(self.raw.get('a'))
        self.assertIsNone(self.c.get('a'))

    def test_get_records_pending_reads(self):
        self.raw.set('a', 5)
        self.c.get('a')
        self.c.set('a', 6)

        self.assertEqual(self.c.pending_reads['a'], 5)

    def test_snapshot_restore_only_drops_later_writes(self):
        self.c.set('a', 1)
        snapshot = self.c.snapshot()

        self.c.set('b', 2)
        self.c.set('a', 3)

        self.c.restore(snapshot)

        self.assertEqual(self.c.get('a'), 1)
        self.assertIsNone(self.c.get('b'))

    def test_clear_pending_state(self):
        self.c.set('a', 1)
        self.c.clear_pending_state()

        self.assertDictEqual(self.c.pending_writes, {})


class TestContractDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.d = ContractDriver(driver=self.raw)

    def test_make_key(self):
        self.assertEqual(self.d.make_key('cw721', 'tokens'), 'cw721.tokens')
        self.assertEqual(self.d.make_key('cw721', 'tokens', ['1']), 'cw721.tokens:1')
        self.assertEqual(self.d.make_key('cw721', 'operators', ['a', 'b']), 'cw721.operators:a:b')

    def test_items_merges_pending_and_committed(self):
        self.d.set('cw721.tokens:1', 'a')
        self.d.commit()

        self.d.set('cw721.tokens:2', 'b')

        self.assertDictEqual(self.d.items('cw721.tokens:'), {
            'cw721.tokens:1': 'a',
            'cw721.tokens:2': 'b'
        })

    def test_items_hides_pending_deletes(self):
        self.d.set('cw721.tokens:1', 'a')
        self.d.set('cw721.tokens:2', 'b')
        self.d.commit()

        self.d.delete('cw721.tokens:1')

        self.assertListEqual(self.d.keys('cw721.tokens:'), ['cw721.tokens:2'])
        self.assertListEqual(self.d.values('cw721.tokens:'), ['b'])

    def test_flush(self):
        self.d.set('cw721.tokens:1', 'a')
        self.d.commit()
        self.d.set('cw721.tokens:2', 'b')

        self.d.flush()

        self.assertListEqual(self.d.keys(), [])
