"""Domain core for the reading tracker: models, rules, services"""
