"""Debt payoff projection and recommendation engine"""
