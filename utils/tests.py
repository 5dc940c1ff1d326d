from unittest import mock

from django.db import DatabaseError, IntegrityError
from django.test import SimpleTestCase
from rest_framework.exceptions import NotFound

from .exceptions import exception_handler
from .tech_stack import format_tech_stack, parse_tech_stack


class TechStackTest(SimpleTestCase):
    def test_parse_string(self):
        self.assertEqual(parse_tech_stack(' React, ,TypeScript,React '), ['React', 'TypeScript', 'React'])

    def test_parse_list_and_empty(self):
        self.assertEqual(parse_tech_stack(['Go', '  ', 'Rust']), ['Go', 'Rust'])
        self.assertEqual(parse_tech_stack(''), [])
        self.assertEqual(parse_tech_stack(None), [])

    def test_format(self):
        self.assertEqual(format_tech_stack(['Go', 'Rust']), 'Go, Rust')
        self.assertEqual(format_tech_stack(None), '')


class ExceptionHandlerTest(SimpleTestCase):
    def setUp(self):
        self.context = {'view': mock.Mock()}

    def test_api_exceptions_use_drf_response(self):
        resp = exception_handler(NotFound('gone'), self.context)
        self.assertEqual(resp.status_code, 404)

    def test_integrity_error_is_conflict(self):
        resp = exception_handler(IntegrityError('UNIQUE constraint failed'), self.context)
        self.assertEqual(resp.status_code, 409)
        self.assertIn('UNIQUE constraint failed', resp.data['error'])

    def test_database_error_is_unavailable(self):
        resp = exception_handler(DatabaseError('connection lost'), self.context)
        self.assertEqual(resp.status_code, 503)
        self.assertIn('connection lost', resp.data['error'])

    def test_other_errors_fall_through(self):
        self.assertIsNone(exception_handler(RuntimeError('boom'), self.context))
