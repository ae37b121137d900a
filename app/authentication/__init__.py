"""
Authentication application.

Accounts, roles and ratings for the marketplace.

Key components:
    - User model: Email-based login, role (buyer/seller/admin), coin balance
    - Rating model: 1-5 scores between users
    - RatingService: Records ratings and maintains the average
    - Permissions: IsSeller, IsOwnerOrAdmin

Usage:
    from authentication.models import User
    from authentication.services import RatingService
"""
