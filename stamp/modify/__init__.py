"""Modifiers that append, prepend, replace or delete content in values."""