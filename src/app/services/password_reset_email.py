"""
Password reset email template.
"""

from html import escape

from src.domain.base import utcnow

SUBJECT = "Password Reset"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }}
    .container {{ background-color: #f9f9f9; border-radius: 10px; padding: 30px; border: 1px solid #ddd; }}
    .content {{ background-color: white; padding: 20px; border-radius: 5px; }}
    .button {{ display: inline-block; padding: 12px 30px; background-color: #3498db; color: white; text-decoration: none; border-radius: 5px; margin: 20px 0; font-weight: bold; }}
    .warning {{ background-color: #fff3cd; border-left: 4px solid #ffc107; padding: 15px; margin: 20px 0; }}
    .footer {{ text-align: center; margin-top: 30px; font-size: 12px; color: #666; }}
  </style>
</head>
<body>
  <div class="container">
    <h1>Password Reset</h1>
    <div class="content">
      <p>Hello, <strong>{name}</strong>!</p>
      <p>We received a request to reset the password of your account. If you made this request, click the button below:</p>
      <div style="text-align: center;">
        <a href="{reset_url}" class="button">Reset Password</a>
      </div>
      <p>Or copy and paste this link into your browser:</p>
      <p style="word-break: break-all; color: #3498db;">{reset_url}</p>
      <div class="warning">
        <strong>Important:</strong>
        <ul>
          <li>This link expires in <strong>{ttl_minutes} minutes</strong></li>
          <li>The link can only be used once</li>
          <li>After you reset your password this link stops working</li>
        </ul>
      </div>
      <p>If you <strong>did not request</strong> a password reset, ignore this email. Your password will not change.</p>
    </div>
    <div class="footer">
      <p>This is an automated message, please do not reply.</p>
      <p>&copy; {year} Vehicle Maintenance API. All rights reserved.</p>
    </div>
  </div>
</body>
</html>
"""

TEXT_TEMPLATE = """Hello, {name}!

We received a request to reset the password of your account.

To reset your password, open the link below:
{reset_url}

IMPORTANT:
- This link expires in {ttl_minutes} minutes
- The link can only be used once
- After you reset your password this link stops working

If you did not request a password reset, ignore this email. Your password will not change.

---
This is an automated message, please do not reply.
(c) {year} Vehicle Maintenance API. All rights reserved.
"""


def build_password_reset_email(name: str, reset_url: str, ttl_minutes: int) -> dict:
    """
    Render the password reset email.

    Returns:
        Dict with subject, html and text
    """
    year = utcnow().year
    html = HTML_TEMPLATE.format(
        name=escape(name),
        reset_url=escape(reset_url, quote=True),
        ttl_minutes=ttl_minutes,
        year=year,
    )
    text = TEXT_TEMPLATE.format(
        name=name, reset_url=reset_url, ttl_minutes=ttl_minutes, year=year
    )
    return {"subject": SUBJECT, "html": html, "text": text}
