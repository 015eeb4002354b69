pytest_plugins = ["superclone.testing.conftest"]
