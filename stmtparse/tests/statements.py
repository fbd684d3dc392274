"""
Synthetic statement texts shaped like real extracted PDF text.
"""

DISCOVER_STATEMENT = """DISCOVER IT CARD ACCOUNT SUMMARY
ACCOUNT ENDING IN 1234
OPEN TO CLOSE DATE: 03/01/2024 - 03/31/2024
TRANSACTIONS
DATE PAYMENTS AND CREDITS AMOUNT
03/15 INTERNET PAYMENT - THANK YOU -$56.78
DATE PURCHASES MERCHANT CATEGORY AMOUNT
03/10 TST*Coffee Shop 123-456-7890 Restaurants $12.34
03/22 AMAZON MKTPLACE, SEATTLE WA Merchandise $1,204.50
FEES AND INTEREST CHARGED
TOTAL FEES FOR THIS PERIOD $0.00
Manage your account at Discover.com
"""

TD_STATEMENT = """TD Bank, America's Most Convenient Bank
Customer Service: 1-800-937-2000 | tdbank.com
Primary Account: 123-4567890
Statement Period: Mar 01 2024-Mar 31 2024
ACCOUNT SUMMARY
DAILY ACCOUNT ACTIVITY
Electronic Deposits
POSTING DATE DESCRIPTION AMOUNT
03/15 CCD DEPOSIT, PAYROLL ACME CORP 1,056.78
Subtotal: 1,056.78
Electronic Payments
POSTING DATE DESCRIPTION AMOUNT
03/10 DEBIT POS, *****12345678 AUT 031024 DDA PUR STARBUCKS 800 BOSTON * MA 12.34
03/12 eTransfer to SAVINGS ***5678 200.00
Subtotal: 212.34
DAILY BALANCE SUMMARY
DATE BALANCE
"""


def discover_statement(start: str, end: str, lines) -> str:
    """Minimal Discover statement with the given period (MM/DD/YYYY) and transaction lines."""
    return (
        f"OPEN TO CLOSE DATE: {start} - {end}\n"
        "DATE PAYMENTS AND CREDITS AMOUNT\n"
        + "".join(f"{line}\n" for line in lines)
        + "TOTAL FEES FOR THIS PERIOD $0.00\n"
        "Discover.com\n"
    )


def td_statement(period: str, deposits, payments) -> str:
    """Minimal TD Bank statement with the given period ("Mon D YYYY-Mon D YYYY")."""
    return (
        "tdbank.com\n"
        f"Statement Period: {period}\n"
        "DAILY ACCOUNT ACTIVITY\n"
        "Electronic Deposits\n"
        "POSTING DATE DESCRIPTION AMOUNT\n"
        + "".join(f"{line}\n" for line in deposits)
        + "Electronic Payments\n"
        "POSTING DATE DESCRIPTION AMOUNT\n"
        + "".join(f"{line}\n" for line in payments)
        + "DAILY BALANCE SUMMARY\n"
    )
