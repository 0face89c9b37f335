# utils/email.py
import html

import requests

BREVO_SEND_URL = "https://api.brevo.com/v3/smtp/email"


class EmailDeliveryError(Exception):
     """Raised when the e-mail provider rejects or cannot take a message."""


def build_otp_email_html(otp: str, customer_name: str, transaction_id: str, ttl_minutes: int) -> str:
     otp, customer_name, transaction_id = (html.escape(str(value)) for value in (otp, customer_name, transaction_id))
     return f"""
          <h2>Hello {customer_name},</h2>
          <p>Use the following code to verify your payment:</p>
          <h1 style="color:#007bff;letter-spacing:5px">{otp}</h1>
          <p>Transaction number: <strong>{transaction_id}</strong></p>
          <p>This code expires in {ttl_minutes} minutes. Do not share it with anyone.</p>
     """


def send_otp_email(
     to_email: str,
     otp: str,
     transaction_id: str,
     customer_name: str,
     *,
     api_key: str,
     sender_name: str,
     sender_email: str,
     ttl_minutes: int = 10,
     timeout: float = 10,
):
     if not api_key:
          raise EmailDeliveryError("BREVO_API_KEY is not set")

     try:
          response = requests.post(
               BREVO_SEND_URL,
               headers={
                    "api-key": api_key,
                    "Content-Type": "application/json",
               },
               json={
                    "sender": {"name": sender_name, "email": sender_email},
                    "to": [{"email": to_email, "name": customer_name}],
                    "subject": "Your Secure Payment Verification Code",
                    "htmlContent": build_otp_email_html(otp, customer_name, transaction_id, ttl_minutes),
               },
               timeout=timeout,
          )
     except requests.RequestException as e:
          raise EmailDeliveryError(f"Brevo request failed: {e}") from e
     if response.status_code not in (200, 201, 202):
          raise EmailDeliveryError(f"Brevo error: {response.text}")
