from .client import LeetCodeAPIError, LeetCodeClient, ANALYTICS_SECTIONS

__all__ = ['LeetCodeAPIError', 'LeetCodeClient', 'ANALYTICS_SECTIONS']
