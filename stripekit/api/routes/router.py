from fastapi import APIRouter

from stripekit.packages.licensing.routes import licensing
from stripekit.packages.provisioning.routes import subscriptions
from stripekit.packages.webhooks.routes import webhooks

api_router = APIRouter()

# Webhooks (no auth - signature verified internally)
api_router.include_router(webhooks.router, tags=["webhooks"])

# License keys (the key is the credential)
api_router.include_router(licensing.router, tags=["licensing"])

# Signup
api_router.include_router(subscriptions.router, tags=["subscriptions"])
