"""
Serverless entry point: exposes the repolang ASGI app as a Lambda-style handler
"""
import sys
from pathlib import Path

# the deployment bundle ships backend/ as plain source, not an installed package
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from repolang.main import app

from mangum import Mangum

# run the lifespan so each cold start checks GITHUB_TOKEN and opens the GitHub client
mangum_handler = Mangum(app, lifespan="auto")


def handler(event, context=None):
    return mangum_handler(event, context)
