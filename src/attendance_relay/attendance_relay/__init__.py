"""Attendance Relay package.

Replays stored ERP session cookies against the campus attendance endpoint,
one request per stored credential, and keeps a bounded outcome log.
Organized by feature modules (credentials, submission, batch, ...) with a
thin Flask controller layer over plain service objects.
"""
