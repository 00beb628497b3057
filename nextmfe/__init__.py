"""Next.js micro-frontend workspace scaffolding."""
