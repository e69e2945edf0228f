"""
learn-python: demonstration HTTP microservice
"""
