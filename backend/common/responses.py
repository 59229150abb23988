"""
Success envelope helpers.
"""
from rest_framework import status
from rest_framework.response import Response


def envelope(status_code=status.HTTP_200_OK, **payload):
    """Build a {"success": true, ...payload} response."""
    return Response({'success': True, **payload}, status=status_code)
