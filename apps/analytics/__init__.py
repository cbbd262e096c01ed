"""Analytics app package: monthly employee KPIs and the admin leaderboard."""
