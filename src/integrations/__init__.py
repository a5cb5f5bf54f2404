"""
Integrations with external providers (Amazon SES).
"""
