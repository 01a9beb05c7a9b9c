import os

# Keep the developer's shell settings out of configuration-dependent tests.
for key in [k for k in os.environ if k.startswith("MARKOV_")]:
    del os.environ[key]
os.environ.pop("LOG_LEVEL", None)
