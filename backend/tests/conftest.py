import pytest


@pytest.fixture
def boats_payload():
    return {
        "data": {
            "boats": [
                {
                    "boatName": "YF-21",
                    "slots": [
                        {"startTime": "13:00", "endTime": "16:00", "status": "×"},
                        {"startTime": "9:00", "endTime": "12:00", "status": "◯"},
                    ],
                },
                {
                    "boatName": "SR-X",
                    "slots": [{"time": "10:00〜12:00", "status": 1, "memo": "要予約"}],
                },
            ]
        }
    }


@pytest.fixture
def availability_html():
    return """
    <div class="boat">
      <h3>YF-21</h3>
      <table>
        <tr><th>時間</th><th>状況</th><th>備考</th></tr>
        <tr><td>13:00〜16:00</td><td>×</td><td>満席</td></tr>
        <tr><td>9:00〜12:00</td><td>◯</td><td></td></tr>
      </table>
    </div>
    """
