"""Test environment: must run before todo_api.core.config is imported."""

import os

os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["ALLOW_ADMIN_REGISTRATION"] = "false"
