"""
Success envelope shared by every endpoint: ``{"success": true, "data": ..., "message"?}``.
"""
from rest_framework import status as http_status
from rest_framework.response import Response


def success(data=None, message=None, status=http_status.HTTP_200_OK):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return Response(body, status=status)
