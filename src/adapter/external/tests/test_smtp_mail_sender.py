"""Tests for SMTPMailSender with a mocked SMTP connection."""

import smtplib
import unittest
from unittest.mock import patch

from adapter.external.smtp_mail_sender import SMTPMailSender
from domain.model.errors import UpstreamError


class TestSMTPMailSender(unittest.TestCase):

    def setUp(self):
        self.sender = SMTPMailSender('smtp.example.com', 587, 'no-reply@example.com', 'pw')

    @patch('adapter.external.smtp_mail_sender.smtplib.SMTP')
    def test_send_logs_in_and_sends(self, mock_smtp):
        conn = mock_smtp.return_value.__enter__.return_value

        self.sender.send('user@example.com', 'Verify', 'Your OTP is 123456.')

        mock_smtp.assert_called_once_with('smtp.example.com', 587, timeout=10.0)
        conn.starttls.assert_called_once()
        conn.login.assert_called_once_with('no-reply@example.com', 'pw')
        message = conn.send_message.call_args[0][0]
        self.assertEqual(message['To'], 'user@example.com')
        self.assertEqual(message['From'], 'no-reply@example.com')
        self.assertIn('123456', message.get_content())

    @patch('adapter.external.smtp_mail_sender.smtplib.SMTP')
    def test_smtp_error_becomes_upstream_error(self, mock_smtp):
        conn = mock_smtp.return_value.__enter__.return_value
        conn.login.side_effect = smtplib.SMTPAuthenticationError(535, b'bad credentials')

        with self.assertRaises(UpstreamError):
            self.sender.send('user@example.com', 'Verify', 'body')

    @patch('adapter.external.smtp_mail_sender.smtplib.SMTP', side_effect=OSError('connection refused'))
    def test_connection_error_becomes_upstream_error(self, _mock_smtp):
        with self.assertRaises(UpstreamError):
            self.sender.send('user@example.com', 'Verify', 'body')

    def test_from_env_requires_credentials(self):
        with patch.dict('os.environ', {'SMTP_HOST': 'smtp.example.com', 'EMAIL_USER': '', 'EMAIL_PASSWORD': ''}):
            with self.assertRaises(ValueError):
                SMTPMailSender.from_env()


if __name__ == '__main__':
    unittest.main()
