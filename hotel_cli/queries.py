# queries.py
# Fixed SQL used by the menus and the web views.
# Every user-supplied value is a %s driver parameter.

# ---------- USERS ----------

CREATE_USER = """
    INSERT INTO Users (name, password, userType)
    VALUES (%s, %s, 'customer')
    RETURNING userID
"""

LOG_IN = """
    SELECT userID, userType
    FROM Users
    WHERE userID = %s AND password = %s
"""

IS_MANAGER = """
    SELECT DISTINCT A.userID
    FROM Users A
    WHERE (A.userType = 'manager' OR A.userType = 'admin')
    AND A.userID = %s
"""

IS_ADMIN = """
    SELECT A.userID
    FROM Users A
    WHERE A.userID = %s
    AND A.userType = 'admin'
"""

MANAGES_HOTEL = """
    SELECT DISTINCT A.hotelID
    FROM Hotel A
    WHERE A.managerUserID = %s
    AND A.hotelID = %s
"""

# ---------- BROWSING & BOOKING ----------

# hotel name is last since it is the widest column
HOTELS_NEARBY = """
    SELECT H.hotelID, H.latitude, H.longitude, H.dateEstablished, H.hotelName
    FROM Hotel H
    WHERE sqrt(power(H.latitude - %s, 2) + power(H.longitude - %s, 2)) <= %s
    ORDER BY H.hotelID
"""

ROOMS_ON_DATE = """
    SELECT R.price, R.roomNumber,
           CASE WHEN NOT EXISTS (SELECT *
                                 FROM RoomBookings B
                                 WHERE B.bookingDate = %s
                                 AND B.hotelID = R.hotelID
                                 AND B.roomNumber = R.roomNumber)
                THEN 'open' ELSE 'reserved' END AS status
    FROM Rooms R
    WHERE R.hotelID = %s
    ORDER BY R.roomNumber
"""

ROOM_BOOKED_ON = """
    SELECT B.hotelID, B.roomNumber, B.bookingDate
    FROM RoomBookings B
    WHERE B.bookingDate = %s
    AND B.hotelID = %s
    AND B.roomNumber = %s
"""

ROOM_PRICE = """
    SELECT DISTINCT A.price
    FROM Rooms A
    WHERE A.roomNumber = %s
    AND A.hotelID = %s
"""

BOOK_ROOM = """
    INSERT INTO RoomBookings (customerID, hotelID, roomNumber, bookingDate)
    VALUES (%s, %s, %s, %s)
"""

CUSTOMER_BOOKINGS = """
    SELECT A.hotelID, A.roomNumber, B.price, A.bookingDate
    FROM RoomBookings A, Rooms B
    WHERE B.hotelID = A.hotelID
    AND A.roomNumber = B.roomNumber
    AND A.customerID = %s
    ORDER BY A.bookingDate DESC
    LIMIT %s
"""

# ---------- MANAGERS ----------

UPDATE_ROOM = """
    UPDATE Rooms
    SET price = %s, imageURL = %s
    WHERE hotelID = %s
    AND roomNumber = %s
"""

LOG_ROOM_UPDATE = """
    INSERT INTO RoomUpdatesLog (managerID, hotelID, roomNumber, updatedOn)
    VALUES (%s, %s, %s, %s)
"""

RECENT_ROOM_UPDATES = """
    SELECT A.updateNumber, A.managerID, A.hotelID, A.roomNumber, A.updatedOn
    FROM RoomUpdatesLog A
    WHERE A.managerID = %s
    AND EXISTS (SELECT * FROM Hotel B WHERE B.managerUserID = A.managerID AND B.hotelID = A.hotelID)
    ORDER BY A.updateNumber DESC
    LIMIT %s
"""

HOTEL_BOOKINGS = """
    SELECT A.hotelID, A.roomNumber, B.price, A.bookingDate
    FROM RoomBookings A, Rooms B
    WHERE B.hotelID = A.hotelID
    AND A.roomNumber = B.roomNumber
    AND EXISTS (SELECT * FROM Hotel C WHERE C.managerUserID = %s AND B.hotelID = C.hotelID)
    ORDER BY A.bookingDate DESC
    LIMIT %s
"""

REGULAR_CUSTOMERS = """
    SELECT D.hotelID, A.userID, A.name, COUNT(B.customerID) AS bookings
    FROM Hotel D, Users A, RoomBookings B
    WHERE A.userID = B.customerID
    AND D.hotelID = B.hotelID
    AND D.managerUserID = %s
    GROUP BY A.userID, A.name, D.hotelID
    ORDER BY COUNT(B.customerID) DESC
    LIMIT %s
"""

# ---------- REPAIRS ----------

REPAIR_REQUEST_EXISTS = """
    SELECT A.requestNumber
    FROM RoomRepairRequests A
    WHERE A.repairID IN (SELECT B.repairID
                         FROM RoomRepairs B
                         WHERE B.companyID = %s
                         AND B.hotelID = %s
                         AND B.roomNumber = %s)
"""

ROOM_REPAIRED_BY = """
    SELECT A.repairID
    FROM RoomRepairs A
    WHERE A.companyID = %s
    AND A.hotelID = %s
    AND A.roomNumber = %s
"""

PLACE_REPAIR_REQUEST = """
    INSERT INTO RoomRepairRequests (managerID, repairID)
    SELECT %s, B.repairID
    FROM RoomRepairs B
    WHERE B.companyID = %s
    AND B.hotelID = %s
    AND B.roomNumber = %s
    LIMIT 1
"""

REPAIR_HISTORY = """
    SELECT B.companyID, B.hotelID, B.roomNumber, B.repairDate
    FROM RoomRepairRequests A, RoomRepairs B
    WHERE A.repairID = B.repairID
    AND EXISTS (SELECT D.hotelID
                FROM Hotel D
                WHERE D.hotelID = B.hotelID
                AND D.managerUserID = %s)
    ORDER BY B.repairDate DESC
"""
