"""
Jobly - job board API over companies and their job postings.
"""
__version__ = "1.0.0"
