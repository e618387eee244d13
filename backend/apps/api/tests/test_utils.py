import unittest
from rest_framework import status
from rest_framework.exceptions import ValidationError
from apps.api.utils import ERROR_STATUS_MAP, error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("not_found", "missing", {"path": "/nope"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"path": "/nope"})

    def test_unknown_code_defaults_to_bad_request(self):
        resp = error_response("SOMETHING_ODD", "odd")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertNotIn("details", resp.data["error"])

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_validation_error_details_are_flattened(self):
        resp = error_response("VALIDATION_ERROR", "bad", ValidationError({"currency": ["invalid"]}))
        self.assertEqual(resp.data["error"]["details"], {"currency": ["invalid"]})

    def test_blank_code_or_message_rejected(self):
        with self.assertRaises(ValueError):
            error_response(" ", "message")
        with self.assertRaises(ValueError):
            error_response("CODE", "")

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValueError):
            error_response("CODE", "message", http_status=42)

    def test_status_map_only_covers_client_errors(self):
        self.assertEqual(
            set(ERROR_STATUS_MAP),
            {"VALIDATION_ERROR", "NOT_FOUND", "METHOD_NOT_ALLOWED", "UNSUPPORTED_MEDIA_TYPE"},
        )
        resp = error_response("SERVICE_UNAVAILABLE", "down")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
