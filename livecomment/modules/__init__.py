"""Feature modules: auth, user, livestream, comment, moderation and report."""
