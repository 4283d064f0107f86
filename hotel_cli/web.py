import datetime
import logging
import tempfile

from flask import Flask, Response, jsonify, redirect, render_template_string, request, send_file, session

from . import config
from . import queries
from .db import Database
from .reports import build_excel, build_pdf
from .table import render

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

MANAGER_ROLES = ("manager", "admin")

LOGIN_PAGE = """
<!doctype html>
<title>Hotel login</title>
{% if error %}<p>{{ error }}</p>{% endif %}
<form method="post">
  <input name="userid" placeholder="User ID">
  <input name="password" type="password" placeholder="Password">
  <button type="submit">Log in</button>
</form>
"""


# ======================
#  DB CONNECTION
# ======================
def open_database():
    return Database.from_config(config.load_db_config())


def fetch_table(sql, params):
    db = open_database()
    try:
        return db.fetch_table(sql, params)
    finally:
        db.cleanup()


def text_table(labels, rows):
    return Response(render(labels, rows), mimetype="text/plain")


# ======================
#  AUTH HELPERS
# ======================
def require_login():
    return "user_id" in session


def require_manager():
    return session.get("role") in MANAGER_ROLES


# ======================
#  ROUTES
# ======================

@app.route("/")
def index():
    if not require_login():
        return redirect("/login")
    return Response(
        "GET /hotels?lat=&long=\n"
        "GET /rooms?hotel_id=&date=mm/dd/yyyy\n"
        "GET /api/bookings\n"
        "GET /report/pdf\n"
        "GET /report/excel\n",
        mimetype="text/plain"
    )


@app.route("/hotels")
def hotels():
    if not require_login():
        return redirect("/login")

    latitude = request.args.get("lat", type=float)
    longitude = request.args.get("long", type=float)
    if latitude is None or longitude is None:
        return "Numeric lat and long are required", 400

    labels, rows = fetch_table(queries.HOTELS_NEARBY, (latitude, longitude, config.SEARCH_RADIUS))
    return text_table(labels, rows)


@app.route("/rooms")
def rooms():
    if not require_login():
        return redirect("/login")

    hotel_id = request.args.get("hotel_id", type=int)
    view_date = request.args.get("date", "")
    try:
        datetime.datetime.strptime(view_date, config.DATE_FORMAT)
    except ValueError:
        return "date must be mm/dd/yyyy", 400
    if hotel_id is None:
        return "Numeric hotel_id is required", 400

    labels, rows = fetch_table(queries.ROOMS_ON_DATE, (view_date, hotel_id))
    return text_table(labels, rows)


# ======================
#        LOGIN
# ======================

@app.route("/login", methods=["GET", "POST"])
def login():
    error = None

    if request.method == "POST":
        password = request.form.get("password", "")
        try:
            user_id = int(request.form.get("userid", ""))
        except ValueError:
            user_id = None

        user = None
        if user_id is not None:
            db = open_database()
            try:
                rows = db.execute_query_and_return_result(queries.LOG_IN, (user_id, password))
            finally:
                db.cleanup()
            if rows:
                user = rows[0]

        if user:
            session["user_id"] = user_id
            session["role"] = user[1]
            logger.info("Web login for user %s", user_id)
            return redirect("/")
        error = "Invalid user ID or password"

    return render_template_string(LOGIN_PAGE, error=error)


@app.route("/logout")
def logout():
    session.clear()
    return redirect("/login")


# ======================
#        REPORTS
# ======================

def manager_bookings():
    return fetch_table(queries.HOTEL_BOOKINGS, (session["user_id"], config.RECENT_LIMIT))


@app.route("/report/pdf")
def report_pdf():
    if not require_login():
        return redirect("/login")
    if not require_manager():
        return "Access denied", 403

    labels, rows = manager_bookings()
    temp = tempfile.NamedTemporaryFile(delete=False, suffix=".pdf")
    temp.close()
    build_pdf("Hotel booking history", labels, rows, temp.name)

    return send_file(temp.name, as_attachment=True, download_name="bookings_report.pdf")


@app.route("/report/excel")
def report_excel():
    if not require_login():
        return redirect("/login")
    if not require_manager():
        return "Access denied", 403

    labels, rows = manager_bookings()
    temp = tempfile.NamedTemporaryFile(delete=False, suffix=".xlsx")
    temp.close()
    build_excel("Bookings", labels, rows, temp.name)

    return send_file(temp.name, as_attachment=True, download_name="bookings_report.xlsx")


# ======================
#           API
# ======================

@app.route("/api/bookings", methods=["GET"])
def api_get_bookings():
    if not require_login():
        return jsonify({"error": "Login required"}), 401

    labels, rows = fetch_table(queries.CUSTOMER_BOOKINGS, (session["user_id"], config.RECENT_LIMIT))
    return jsonify([dict(zip(labels, row)) for row in rows])


if __name__ == "__main__":
    app.run(debug=True)
