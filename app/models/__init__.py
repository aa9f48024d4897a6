from app.models.user import User
from app.models.category import Category
from app.models.book import Book
from app.models.booking import Booking
from app.models.payment_intent import PaymentIntent
from app.models.payment import Payment
from app.models.report import BookReport

# add ALL models here
