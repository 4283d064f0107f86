import datetime
import logging
import sys

import psycopg2

from . import config
from . import queries
from .table import print_table

logger = logging.getLogger(__name__)

PERMISSION_ERROR = "  - Permission Error: You are not allowed to perform this operation.\n\n"


class Session:
    """State of one CLI run: the database, the console and the logged-in user.

    ``read_line`` takes a prompt and returns the line the user typed, the way
    ``input`` does. ``write`` and ``err`` receive text verbatim.
    """

    def __init__(self, db, read_line=input, write=None, err=None):
        self.db = db
        self.read_line = read_line
        self.write = write or sys.stdout.write
        self.err = err or sys.stderr.write
        self.user_id = None
        self.user_type = None

    def ask(self, prompt):
        return self.read_line(prompt).strip()

    def ask_int(self, prompt):
        return int(self.ask(prompt))

    def ask_float(self, prompt):
        return float(self.ask(prompt))

    def ask_date(self, prompt):
        """Read a mm/dd/yyyy date; raises ValueError on anything else."""
        text = self.ask(prompt)
        datetime.datetime.strptime(text, config.DATE_FORMAT)
        return text

    def show(self, sql, params=None):
        labels, rows = self.db.fetch_table(sql, params)
        print_table(labels, rows, self.write)


# ======================
#  MENU I/O
# ======================

def greeting(session):
    session.write(
        "\n\n*******************************************************\n"
        "              User Interface                           \n"
        "*******************************************************\n\n"
    )


def read_choice(session):
    """Prompt until the user types an integer."""
    while True:
        try:
            return int(session.read_line("Please make your choice: ").strip())
        except ValueError:
            session.write("Your input is invalid!\n")


def confirm(session, prompt="Proceed? (Y/N): "):
    answer = session.read_line(prompt).lower()
    while True:
        if "y" in answer:
            return True
        if "n" in answer:
            return False
        answer = session.read_line("[ERROR] " + prompt).lower()


def run_option(session, handler):
    """Run one menu operation; driver errors and bad input are reported, not raised."""
    try:
        return handler(session)
    except psycopg2.Error as e:
        session.err(f"{e}\n")
    except ValueError as e:
        logger.debug("Rejected input in %s: %s", handler.__name__, e)
        session.err(f"Your input is invalid! ({e})\n")
    return None


# ======================
#  ACCOUNTS
# ======================

def create_user(session):
    name = session.ask("\tEnter name: ")
    password = session.ask("\tEnter password: ")
    user_id = session.db.execute_returning(queries.CREATE_USER, (name, password))
    logger.info("Created user %s", user_id)
    session.write(f"User successfully created with userID = {user_id}\n")
    return user_id


def log_in(session):
    """Return the user id when the credentials match a Users row, else None."""
    user_id = session.ask_int("\tEnter userID: ")
    password = session.ask("\tEnter password: ")
    rows = session.db.execute_query_and_return_result(queries.LOG_IN, (user_id, password))
    if not rows:
        logger.info("Failed login for user %s", user_id)
        return None
    session.user_id = user_id
    session.user_type = rows[0][1]
    logger.info("User %s logged in as %s", user_id, session.user_type)
    return user_id


def log_out(session):
    logger.info("User %s logged out", session.user_id)
    session.user_id = None
    session.user_type = None


def is_manager(session):
    return session.db.execute_query(queries.IS_MANAGER, (session.user_id,)) > 0


def require_manager(session):
    if is_manager(session):
        return True
    session.write(PERMISSION_ERROR)
    return False


def manages_hotel(session, hotel_id):
    return session.db.execute_query(queries.MANAGES_HOTEL, (session.user_id, hotel_id)) > 0


def is_admin(session):
    return session.db.execute_query(queries.IS_ADMIN, (session.user_id,)) > 0


# ======================
#  CUSTOMERS
# ======================

def view_hotels(session):
    latitude = session.ask_float("\tEnter latitude: ")
    longitude = session.ask_float("\tEnter longitude: ")
    session.show(queries.HOTELS_NEARBY, (latitude, longitude, config.SEARCH_RADIUS))


def view_rooms(session):
    hotel_id = session.ask_int("\tEnter hotel id: ")
    view_date = session.ask_date("\tEnter booking date (mm/dd/yyyy): ")
    session.show(queries.ROOMS_ON_DATE, (view_date, hotel_id))


def book_room(session):
    """Book a room for the logged-in user; returns True when a booking was made."""
    hotel_id = session.ask_int("\tEnter hotel id: ")
    room_number = session.ask_int("\tEnter room number: ")
    book_date = session.ask_date("\tEnter your preferred booking date (mm/dd/yyyy): ")

    if session.db.execute_query(queries.ROOM_BOOKED_ON, (book_date, hotel_id, room_number)) != 0:
        session.write(
            f"\n  -- Sorry. Room {room_number} in hotel {hotel_id} is not available for date \"{book_date}\".\n"
            "    You may view the room availability with option 2 in the main menu. Thank you.\n\n"
        )
        return False

    labels, rows = session.db.fetch_table(queries.ROOM_PRICE, (room_number, hotel_id))
    if not rows:
        session.write(
            f"  -- Sorry. Room {room_number} is not available in hotel {hotel_id}.\n"
            "    You may view the room availability with option 2 in the main menu. Thank you.\n\n"
        )
        return False
    print_table(labels, rows, session.write)

    if not confirm(session):
        return False

    session.db.execute_update(queries.BOOK_ROOM, (session.user_id, hotel_id, room_number, book_date))
    logger.info("User %s booked room %s in hotel %s for %s", session.user_id, room_number, hotel_id, book_date)
    session.write("\n   -- Thank you for booking! \n\n")
    return True


def view_recent_bookings(session):
    session.show(queries.CUSTOMER_BOOKINGS, (session.user_id, config.RECENT_LIMIT))


# ======================
#  MANAGERS
# ======================

def update_room_info(session):
    if not require_manager(session):
        return False

    hotel_id = session.ask_int("\tEnter hotel id: ")
    room_number = session.ask_int("\tEnter room number: ")

    if not manages_hotel(session, hotel_id) and not is_admin(session):
        session.write("  - Permission Error: You are not allowed to perform this operation in hotels you do not manage.\n\n")
        return False

    new_price = session.ask_int("\tEnter new price: ")
    new_image_url = session.ask("\tEnter new image url: ")
    today = datetime.date.today().strftime(config.DATE_FORMAT)

    session.db.execute_update(queries.UPDATE_ROOM, (new_price, new_image_url, hotel_id, room_number))
    session.write("\n   -- Updated Rooms successfully! \n\n")
    session.db.execute_update(queries.LOG_ROOM_UPDATE, (session.user_id, hotel_id, room_number, today))
    session.write("\n   -- Updated Log successfully! \n\n")
    return True


def view_recent_updates(session):
    if require_manager(session):
        session.show(queries.RECENT_ROOM_UPDATES, (session.user_id, config.RECENT_LIMIT))


def view_hotel_booking_history(session):
    if require_manager(session):
        session.show(queries.HOTEL_BOOKINGS, (session.user_id, config.RECENT_LIMIT))


def view_regular_customers(session):
    if require_manager(session):
        session.show(queries.REGULAR_CUSTOMERS, (session.user_id, config.RECENT_LIMIT))


def place_repair_request(session):
    if not require_manager(session):
        return False

    hotel_id = session.ask_int("\tEnter hotel id: ")
    room_number = session.ask_int("\tEnter room number: ")
    company_id = session.ask_int("\tEnter the maintenance company ID: ")

    if not manages_hotel(session, hotel_id):
        session.write("\n  - Sorry. You cannot place repair requests on hotels you do not manage.\n\n")
        return False

    repair_key = (company_id, hotel_id, room_number)
    if session.db.execute_query(queries.REPAIR_REQUEST_EXISTS, repair_key) != 0:
        session.write("\n  - Sorry. This request from the company to the particular hotel and room already exists.\n\n")
        return False

    if session.db.execute_query(queries.ROOM_REPAIRED_BY, repair_key) == 0:
        session.write(
            f"\n  - Sorry. Room {room_number} in hotel {hotel_id} is not currently repaired by company {company_id}\n\n"
        )
        return False

    session.db.execute_update(queries.PLACE_REPAIR_REQUEST, (session.user_id,) + repair_key)
    session.write("\n  - Updated repair requests successfully\n\n")
    return True


def view_repair_history(session):
    if require_manager(session):
        session.show(queries.REPAIR_HISTORY, (session.user_id,))


# ======================
#  MENUS
# ======================

USER_OPTIONS = {
    1: view_hotels,
    2: view_rooms,
    3: book_room,
    4: view_recent_bookings,
    5: update_room_info,
    6: view_recent_updates,
    7: view_hotel_booking_history,
    8: view_regular_customers,
    9: place_repair_request,
    10: view_repair_history,
}

LOG_OUT = 20


def show_main_menu(session):
    session.write("""MAIN MENU
---------
1. Create user
2. Log in
9. < EXIT
""")


def show_user_menu(session):
    session.write(f"""MAIN MENU
---------
1. View Hotels within {config.SEARCH_RADIUS:g} units
2. View Rooms
3. Book a Room
4. View recent booking history
5. Update Room Information
6. View {config.RECENT_LIMIT} recent Room Updates Info
7. View booking history of the hotel
8. View {config.RECENT_LIMIT} regular Customers
9. Place room repair Request to a company
10. View room repair Requests history
.........................
20. Log out
""")


def user_menu(session):
    while True:
        show_user_menu(session)
        choice = read_choice(session)
        if choice == LOG_OUT:
            log_out(session)
            return
        handler = USER_OPTIONS.get(choice)
        if handler is None:
            session.write("Unrecognized choice!\n")
        else:
            run_option(session, handler)


def main_menu(session):
    while True:
        show_main_menu(session)
        choice = read_choice(session)

        if choice == 1:
            run_option(session, create_user)
        elif choice == 2:
            if run_option(session, log_in) is not None:
                user_menu(session)
            else:
                session.write("Login failed: unknown user ID or wrong password.\n")
        elif choice == 9:
            return
        else:
            session.write("Unrecognized choice!\n")
