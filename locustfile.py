from locust import HttpUser, task, between
import random

SAMPLES = [
    "هسا شو بتعمل يا زلمة، الجو كتير منيح اليوم",
    "الخدمة كانت سيئة جدا ولم يرد علي أحد",
    "افتتاح مستشفى جديد في عمان لخدمة المرضى",
    "والله الفريق لعب منيح بس الحكم ظلمنا",
]


class AnalyzeUser(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def analyze_text(self):
        self.client.post(
            "/api/analysis/text",
            json={"text": random.choice(SAMPLES)},
        )

    @task(1)
    def health(self):
        self.client.get("/health")
