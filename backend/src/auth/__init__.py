"""Authentication: password hashing, JWT tokens, login and RBAC dependencies"""
