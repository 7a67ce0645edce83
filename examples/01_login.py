"""
Login - Browser sign-in and session persistence
"""
import asyncio
import webbrowser

from qpw import QPWClient

CLIENT_ID = "your-implicit-grant-client-id"
REGION = "mypurecloud.ie"
REDIRECT_URI = "http://localhost:8080/"


async def main():
    # Session file: work.session (token and region survive restarts)
    async with QPWClient("work") as qpw:

        # Already signed in?
        user = await qpw.resume()
        if user:
            print(f"Welcome back, {user}")
            return

        url = qpw.authorize_url(CLIENT_ID, REGION, REDIRECT_URI)
        webbrowser.open(url)

        # The browser lands on REDIRECT_URI#access_token=...
        redirected = input("Paste the URL you were redirected to: ")
        result = await qpw.complete_login(redirected)

        if result is None:
            print("No access token in that URL")
        elif result.confirmed:
            print(f"Logged in as {qpw.user}")
        else:
            print("Token saved, identity check failed")


if __name__ == "__main__":
    asyncio.run(main())
