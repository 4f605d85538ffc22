#!/usr/bin/env python3
"""
Response envelopes shared by the business routes
"""

from typing import Any, Dict, Optional

def success_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """`{"success": true, "message", "data"}` envelope"""
    return {
        "success": True,
        "message": message,
        "data": data
    }

def error_response(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Error body carried as the HTTPException detail"""
    response = {"success": False, "message": message}
    if details:
        response["details"] = details
    return response

def batch_response(report, action: str) -> Dict[str, Any]:
    """Envelope for a best-effort batch; the message counts successes and failures"""
    message = f"{action}: {report.success_count} succeeded, {report.failure_count} failed"
    return success_response(report.to_dict(), message=message)
