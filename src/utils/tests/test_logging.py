"""Tests for structured JSON logging."""

import json
import sys
import uuid
import logging
import unittest

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, msg='User created', **extra) -> logging.LogRecord:
        record = logging.LogRecord('users', logging.INFO, __file__, 1, msg, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_standard_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'users')
        self.assertEqual(data['message'], 'User created')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        data = json.loads(JSONFormatter().format(self._record(userId='abc')))

        self.assertEqual(data['userId'], 'abc')
        self.assertNotIn('pathname', data)

    def test_non_json_values_are_stringified(self):
        value = uuid.uuid4()

        data = json.loads(JSONFormatter().format(self._record(externalId=value)))

        self.assertEqual(data['externalId'], str(value))

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord('users', logging.ERROR, __file__, 1, 'failed', None, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        self.assertIn('ValueError: boom', data['exception'])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_explicit_level(self):
        setup_structured_logging('debug')

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.WARNING)
