# conftest.py

import os

# database in-memory untuk semua tes (harus sebelum database.py di-import)
os.environ["DATABASE_URL"] = "sqlite://"
