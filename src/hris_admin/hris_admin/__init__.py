"""HRIS admin backend package.

This package is organized by feature modules (organization, employees,
reports, caching, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
