UNKNOWN_INSTRUCTOR = "Unknown Instructor"

CLASS_NOT_FOUND_MESSAGE = "Class not found"
BOOKING_NOT_FOUND_MESSAGE = "Booking not found"
NO_INSTRUCTOR_MESSAGE = "Class has no instructor assigned"
ALREADY_BOOKED_MESSAGE = "You have already booked this class"
NOTIFICATION_NOT_FOUND_MESSAGE = "Notification not found"

MEMBER_BOOKING_TITLE = "Class Booked Successfully"
INSTRUCTOR_BOOKING_TITLE = "🎉 New Class Booking"
CANCELLATION_TITLE = "Class Cancelled"
CLASS_START_TITLE = "Class Starting Soon"

REMINDER_JOB_ID = "check_starting_classes"
