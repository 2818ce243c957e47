from faker import Faker

fake = Faker()


def json_or_none(response):
    try:
        return response.json()
    except ValueError:
        return None
