"""
Web API for editing sessions and translate-all jobs
"""
