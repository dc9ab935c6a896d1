"""
Page context — where the form is being filled in, sent with validate/submit.
"""

from pydantic import BaseModel


class PageContext(BaseModel):
    host: str = ""
    href: str = ""
