"""Notification adapters (mock and Slack).

Concrete services are imported from their modules so that importing the
package does not pull in aiohttp.
"""

__all__ = []
