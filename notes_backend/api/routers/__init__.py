from notes_backend.api.routers import auth, notes, users

__all__ = ["auth", "notes", "users"]
