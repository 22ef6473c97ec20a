"""Unit tests for auth_service module."""

import copy
import threading
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from adapter.fake.mail_sender import FakeMailSender
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from services import auth_service
from services.token_service import TokenIssuer

EMAIL = 'owner@example.com'
PASSWORD = 'secret123'


class AuthServiceTestCase(unittest.TestCase):
    """Shared fixtures: fake repo, fake mailer, fast bcrypt."""

    def setUp(self):
        self.repo = FakeUserRepository()
        self.mailer = FakeMailSender()
        self.tokens = TokenIssuer('access-secret', 'refresh-secret')
        patcher = patch('services.auth_service.BCRYPT_ROUNDS', 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _signup(self, email=EMAIL, password=PASSWORD):
        auth_service.signup(self.repo, self.mailer, email, password)
        return self.repo.get_by_email(email)

    def _verified(self):
        user = self._signup()
        pair = auth_service.verify_otp(self.repo, self.tokens, EMAIL, user.otp)
        return user, pair


class TestSignup(AuthServiceTestCase):

    def test_signup_creates_exactly_one_user(self):
        result = auth_service.signup(self.repo, self.mailer, EMAIL, PASSWORD)

        self.assertIsNone(result)
        self.assertEqual(len(self.repo.store), 1)
        user = self.repo.get_by_email(EMAIL)
        self.assertFalse(user.is_verified)
        self.assertIsNone(user.refresh_token)

    def test_password_is_hashed(self):
        user = self._signup()

        self.assertNotEqual(user.password_hash, PASSWORD)
        self.assertTrue(user.password_hash.startswith('$2'))

    def test_otp_is_six_digits_and_mailed(self):
        user = self._signup()

        self.assertRegex(user.otp, r'^\d{6}$')
        self.assertEqual(len(self.mailer.outbox), 1)
        mail = self.mailer.outbox[0]
        self.assertEqual(mail.to, EMAIL)
        self.assertIn(user.otp, mail.body)

    def test_otp_expires_ten_minutes_out(self):
        before = datetime.now(timezone.utc)
        user = self._signup()
        after = datetime.now(timezone.utc)

        self.assertGreaterEqual(user.otp_expires_at, before + timedelta(minutes=10))
        self.assertLessEqual(user.otp_expires_at, after + timedelta(minutes=10))

    def test_duplicate_email_rejected(self):
        self._signup()

        with self.assertRaises(DuplicateError):
            auth_service.signup(self.repo, self.mailer, EMAIL, 'another-password')
        self.assertEqual(len(self.repo.store), 1)

    def test_duplicate_email_rejected_after_verification(self):
        self._verified()

        with self.assertRaises(DuplicateError):
            auth_service.signup(self.repo, self.mailer, EMAIL, PASSWORD)

    def test_invalid_email_and_short_password_reported_together(self):
        with self.assertRaises(ValidationError) as ctx:
            auth_service.signup(self.repo, self.mailer, 'not-an-email', '123')

        fields = {err['field'] for err in ctx.exception.errors}
        self.assertEqual(fields, {'email', 'password'})
        self.assertEqual(self.repo.store, {})
        self.assertEqual(self.mailer.outbox, [])

    def test_six_character_password_is_enough(self):
        self._signup(password='abcdef')
        self.assertEqual(len(self.repo.store), 1)

    def test_mail_failure_surfaces_as_upstream_error(self):
        self.mailer.fail = True

        with self.assertRaises(UpstreamError):
            auth_service.signup(self.repo, self.mailer, EMAIL, PASSWORD)


class TestVerifyOtp(AuthServiceTestCase):

    def test_verify_returns_tokens_and_stores_refresh(self):
        user, pair = self._verified()

        self.assertEqual(self.tokens.verify_access_token(pair.access_token), user.id)
        self.assertEqual(self.tokens.verify_refresh_token(pair.refresh_token), user.id)
        stored = self.repo.get_by_id(user.id)
        self.assertEqual(stored.refresh_token, pair.refresh_token)
        self.assertTrue(stored.is_verified)
        self.assertIsNone(stored.otp)
        self.assertIsNone(stored.otp_expires_at)

    def test_otp_accepted_at_most_once(self):
        user = self._signup()
        code = user.otp
        auth_service.verify_otp(self.repo, self.tokens, EMAIL, code)

        with self.assertRaises(InvalidOrExpiredError):
            auth_service.verify_otp(self.repo, self.tokens, EMAIL, code)

    def test_verification_racing_on_a_stale_read_is_rejected(self):
        user = self._signup()
        code = user.otp
        stale = copy.copy(user)
        auth_service.verify_otp(self.repo, self.tokens, EMAIL, code)

        with patch.object(self.repo, 'get_by_email', return_value=stale):
            with self.assertRaises(InvalidOrExpiredError):
                auth_service.verify_otp(self.repo, self.tokens, EMAIL, code)

    def test_concurrent_verifications_yield_one_session(self):
        user = self._signup()
        code = user.otp
        both_read = threading.Barrier(2, timeout=5)
        read = self.repo.get_by_email

        def get_by_email(email):
            found = copy.copy(read(email))
            both_read.wait()
            return found

        results = []

        def attempt():
            try:
                results.append(auth_service.verify_otp(self.repo, self.tokens, EMAIL, code))
            except InvalidOrExpiredError as e:
                results.append(e)

        with patch.object(self.repo, 'get_by_email', side_effect=get_by_email):
            threads = [threading.Thread(target=attempt) for _ in range(2)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        sessions = [r for r in results if not isinstance(r, Exception)]
        self.assertEqual(len(results), 2)
        self.assertEqual(len(sessions), 1)
        self.assertEqual(self.repo.get_by_id(user.id).refresh_token, sessions[0].refresh_token)

    def test_wrong_code_rejected(self):
        user = self._signup()
        wrong = '000000' if user.otp != '000000' else '111111'

        with self.assertRaises(InvalidOrExpiredError):
            auth_service.verify_otp(self.repo, self.tokens, EMAIL, wrong)

    def test_expired_code_rejected_even_if_matching(self):
        user = self._signup()
        user.otp_expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)

        with self.assertRaises(InvalidOrExpiredError):
            auth_service.verify_otp(self.repo, self.tokens, EMAIL, user.otp)
        self.assertIsNone(self.repo.get_by_id(user.id).refresh_token)

    def test_unknown_email(self):
        with self.assertRaises(NotFoundError):
            auth_service.verify_otp(self.repo, self.tokens, 'ghost@example.com', '123456')


class TestLogin(AuthServiceTestCase):

    def test_login_success_rotates_refresh_token(self):
        user, first = self._verified()

        second = auth_service.login(self.repo, self.tokens, EMAIL, PASSWORD)

        self.assertNotEqual(first.refresh_token, second.refresh_token)
        self.assertEqual(self.repo.get_by_id(user.id).refresh_token, second.refresh_token)

    def test_wrong_password_and_unknown_email_are_indistinguishable(self):
        self._signup()

        with self.assertRaises(InvalidCredentialsError) as wrong_password:
            auth_service.login(self.repo, self.tokens, EMAIL, 'wrong-password')
        with self.assertRaises(InvalidCredentialsError) as unknown_email:
            auth_service.login(self.repo, self.tokens, 'ghost@example.com', PASSWORD)

        self.assertEqual(str(wrong_password.exception), str(unknown_email.exception))

    def test_unknown_email_still_checks_a_password_hash(self):
        with patch('services.auth_service._verify_password', return_value=False) as check:
            with self.assertRaises(InvalidCredentialsError):
                auth_service.login(self.repo, self.tokens, 'ghost@example.com', PASSWORD)

        check.assert_called_once()
        self.assertTrue(check.call_args[0][1].startswith('$2b$'))


class TestRefreshAccessToken(AuthServiceTestCase):

    def test_refresh_returns_new_access_token_only(self):
        user, pair = self._verified()

        token = auth_service.refresh_access_token(self.repo, self.tokens, pair.refresh_token)

        self.assertEqual(self.tokens.verify_access_token(token), user.id)
        self.assertEqual(self.repo.get_by_id(user.id).refresh_token, pair.refresh_token)

    def test_rotated_out_refresh_token_rejected(self):
        _, old = self._verified()
        auth_service.login(self.repo, self.tokens, EMAIL, PASSWORD)

        with self.assertRaises(UnauthorizedError):
            auth_service.refresh_access_token(self.repo, self.tokens, old.refresh_token)

    def test_missing_token(self):
        for missing in (None, ''):
            with self.assertRaises(UnauthorizedError):
                auth_service.refresh_access_token(self.repo, self.tokens, missing)

    def test_garbage_token(self):
        with self.assertRaises(UnauthorizedError):
            auth_service.refresh_access_token(self.repo, self.tokens, 'not.a.jwt')

    def test_access_token_cannot_be_used_as_refresh_token(self):
        _, pair = self._verified()

        with self.assertRaises(UnauthorizedError):
            auth_service.refresh_access_token(self.repo, self.tokens, pair.access_token)

    def test_refresh_token_for_deleted_user(self):
        _, pair = self._verified()
        self.repo.store.clear()

        with self.assertRaises(UnauthorizedError):
            auth_service.refresh_access_token(self.repo, self.tokens, pair.refresh_token)


if __name__ == '__main__':
    unittest.main()
