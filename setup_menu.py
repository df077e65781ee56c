import os
import sys

from app import app
from menu_store import write_menu_file

STARTER_MENU = {
    'items': [
        {'name': 'Classic Burger', 'price': 8.50, 'image': 'img/fastfood/classic-burger.jpg'},
        {'name': 'Cheese Burger', 'price': 9.00, 'image': 'img/fastfood/cheese-burger.jpg'},
        {'name': 'Chicken Sandwich', 'price': 8.00, 'image': 'img/fastfood/chicken-sandwich.jpg'},
        {'name': 'Veggie Wrap', 'price': 7.50, 'image': 'img/fastfood/veggie-wrap.jpg'},
        {'name': 'Hot Dog', 'price': 5.50, 'image': 'img/fastfood/hot-dog.jpg'},
        {'name': 'Fries', 'price': 3.50, 'image': 'img/fastfood/fries.jpg'},
        {'name': 'Onion Rings', 'price': 4.00, 'image': 'img/fastfood/onion-rings.jpg'},
        {'name': 'Nuggets', 'price': 6.00, 'image': 'img/fastfood/nuggets.jpg'},
    ],
    'featured': {'name': 'Double Bacon Burger', 'price': 12.00, 'image': 'img/fastfood/double-bacon.jpg'},
    'beverages': [
        {'name': 'Cola', 'price': 2.00},
        {'name': 'Lemonade', 'price': 2.50},
        {'name': 'Iced Tea', 'price': 2.50},
        {'name': 'Water', 'price': 1.50},
    ],
}


def seed(path, force=False):
    if os.path.exists(path) and not force:
        print(f"Menu already exists at {path} (use --force to overwrite).")
        return False
    write_menu_file(path, STARTER_MENU)
    print(f"SUCCESS: Starter menu written to {path}")
    return True


if __name__ == '__main__':
    seed(app.config['MENU_PATH'], force='--force' in sys.argv[1:])
