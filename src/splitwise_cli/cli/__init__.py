"""
Command Line Interface Package

Entry point: `splitwise` (splitwise_cli.cli.main:main)

Command Structure:
- splitwise test: check authentication against the API
- splitwise groups: list groups, members and balances
- splitwise add: create an expense (prompts for the group when not given)
- splitwise login / logout / status: manage the cached access token
- splitwise version / config: utility commands

Commands that reach the API sign in through the browser on first use and
reuse the cached token afterwards.
"""
