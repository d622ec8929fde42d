"""Vibe Coding -- one-shot project bootstrapper.

Creates a GitHub repository, scaffolds React (Vite) or Next.js into it,
pushes the initial commit, deploys to Vercel and starts the local dev server.

Key modules:
    bootstrap      - The step-by-step orchestrator (``Bootstrapper``)
    github_client  - GitHub REST API client
    git            - Clone / re-initialise / push
    scaffolder     - Framework generators and placeholder templates
    deployer       - Vercel CLI driver
"""

__version__ = "0.1.0"
