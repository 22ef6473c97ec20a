"""Unit tests for the in-memory adapters — verifies Port contract compliance."""

import unittest
from datetime import datetime, timedelta, timezone

from adapter.fake.object_store import FakeObjectStore
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, UpstreamError


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.expires = datetime.now(timezone.utc) + timedelta(minutes=10)

    # ── create + get (round-trip) ────────────────────────────

    def test_create_and_lookup(self):
        user = self.repo.create('a@example.com', 'hash', '123456', self.expires)

        self.assertIs(self.repo.get_by_id(user.id), user)
        self.assertIs(self.repo.get_by_email('a@example.com'), user)
        self.assertFalse(user.is_verified)

    def test_duplicate_email(self):
        self.repo.create('a@example.com', 'hash', '123456', self.expires)

        with self.assertRaises(DuplicateError):
            self.repo.create('a@example.com', 'hash2', '654321', self.expires)

    # ── updates ──────────────────────────────────────────────

    def test_consume_otp_once(self):
        user = self.repo.create('a@example.com', 'hash', '123456', self.expires)
        now = datetime.now(timezone.utc)

        self.assertTrue(self.repo.consume_otp(user.id, '123456', now))
        self.assertIsNone(user.otp)
        self.assertTrue(user.is_verified)
        self.assertFalse(self.repo.consume_otp(user.id, '123456', now))
        self.assertFalse(self.repo.consume_otp('missing', '123456', now))

    def test_consume_otp_rejects_wrong_or_expired_code(self):
        user = self.repo.create('a@example.com', 'hash', '123456', self.expires)

        self.assertFalse(self.repo.consume_otp(user.id, '654321', datetime.now(timezone.utc)))
        self.assertFalse(self.repo.consume_otp(user.id, '123456', self.expires + timedelta(seconds=1)))
        self.assertFalse(user.is_verified)

    def test_set_refresh_token_overwrites(self):
        user = self.repo.create('a@example.com', 'hash', '123456', self.expires)

        self.repo.set_refresh_token(user.id, 'first')
        self.repo.set_refresh_token(user.id, 'second')

        self.assertEqual(user.refresh_token, 'second')


class TestFakeObjectStore(unittest.TestCase):

    def test_put_and_delete(self):
        store = FakeObjectStore()

        url = store.put('rentsetu/floorPlan/a.pdf', b'x', 'application/pdf')
        self.assertTrue(url.endswith('/rentsetu/floorPlan/a.pdf'))

        store.delete('rentsetu/floorPlan/a.pdf')
        self.assertEqual(store.objects, {})

    def test_configured_failure(self):
        store = FakeObjectStore(fail_on={'bad'})

        with self.assertRaises(UpstreamError):
            store.put('rentsetu/propertyPhotos/bad.jpg', b'x', 'image/jpeg')


if __name__ == '__main__':
    unittest.main()
