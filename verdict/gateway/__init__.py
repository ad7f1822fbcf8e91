"""Remote analysis service boundary.

Operations:
    - POST /api/analyze_sms: sentiment of free text
    - POST /api/analyze_document: sentiment of an uploaded document
    - POST /api/summarize_document: summary of an uploaded document
"""

from verdict.gateway.client import AnalysisGateway, GatewayError, GatewayErrorKind

__all__ = ["AnalysisGateway", "GatewayError", "GatewayErrorKind"]
