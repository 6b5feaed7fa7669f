from models.character import Character, character_id

PICTURE_BASE_URL = "https://vieraboschkova.github.io/swapi-gallery/static/assets/img/people"


def character_picture_url(character: Character) -> str:
    return f"{PICTURE_BASE_URL}/{character_id(character.url)}.jpg"
