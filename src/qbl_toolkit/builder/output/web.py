"""
Module: builder.output.web

Purpose:
    Interactive web quiz: an HTML form of radio-button questions, a
    JavaScript answer checker ("Check Answers" / "Show Answers") and a
    stylesheet. The HTML links the other two by base file name, so web
    output always goes to three files side by side.

Key Functions:
    - render_web(): Write the .html, .js and .css parts

Dependencies:
    - qbl_toolkit.common.text: html_escape, js_string

Used By:
    - builder.controller: WEB output format
"""

from __future__ import annotations

from typing import Iterable, TextIO

from qbl_toolkit.common.text import html_escape, js_string
from qbl_toolkit.core.models import Question

from .latex import choice_letter

_HTML_HEADER = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <link rel="stylesheet" href="{base_name}.css">
</head>
<body>

<form id="quizForm">
  <h1>{title}</h1>

"""

_HTML_FOOTER = """\
  <hr><p>
  Click <b>Check Answers</b> to identify any errors and try again.  Click <b>Show Answers</b> if you also want to know which answer is the correct one.
  </p>
  <button type="button" id="checkAnswersBtn">Check Answers</button>
  <button type="button" id="showAnswersBtn">Show Answers</button>
</form>
<div id="results"></div>
<script src="{base_name}.js"></script>
</body>
</html>
"""

_JS_HEADER = """\
// Fetch all the radio buttons in the quiz
let radioButtons = document.querySelectorAll('input[type="radio"]');

// Add a click event to each radio button
radioButtons.forEach(button => {
  button.addEventListener('click', function() { clearResults(button.name); });
});

function clearResults(button_name) {
  // Clear main results
  document.getElementById('results').innerHTML = '';

  // Clear answers displayed beneath each question
  let answerDiv = document.querySelector(`.answer[data-question="${button_name}"]`);
  answerDiv.innerHTML = "";
}

function PrintResults(show_correct) {
  let correctAnswers = {
"""

_JS_FOOTER = """\
  };

  let userAnswers = {};
  for (let key in correctAnswers) {
    let selectedAnswer = document.querySelector(`input[name="${key}"]:checked`);
    userAnswers[key] = selectedAnswer ? selectedAnswer.value : "";
  }

  let score = 0;
  let results = [];

  for (let key in correctAnswers) {
    let status = userAnswers[key] === correctAnswers[key] ? 1 : 0;
    score += status;
    results.push({
      question: key,
      status: status,
      correctAnswer: correctAnswers[key]
    });
  }

  displayResults(score, results, show_correct);
};

function displayResults(score, results, show_correct) {
  let resultsDiv = document.getElementById('results');
  resultsDiv.innerHTML = `<p>You got ${score} out of ${results.length} correct!</p>`;

  // Reset all answer texts
  let answerDivs = document.querySelectorAll('.answer');
  answerDivs.forEach(div => div.innerHTML = "");

  results.forEach(item => {
    let answerDiv = document.querySelector(`.answer[data-question="${item.question}"]`);
    if (item.status === 0) {
      if (show_correct) {
        answerDiv.innerHTML = `<b>Incorrect</b>. The correct answer is: (${item.correctAnswer})`;
      } else {
        answerDiv.innerHTML = `<b>Incorrect</b>.`;
      }
      answerDiv.style.color = "red";
    } else {
      answerDiv.innerHTML = `<b>Correct!</b>`;
      answerDiv.style.color = "green";
    }
  });
};

document.getElementById('showAnswersBtn').addEventListener('click', function() {
  PrintResults(1);
});

document.getElementById('checkAnswersBtn').addEventListener('click', function() {
  PrintResults(0);
});
"""

_CSS = """\
body {
  font-family: Arial, sans-serif;
  margin: 50px;
}

.question {
  margin-bottom: 20px;
  color: black;
}
.options {
  color: #000088;
}

label {
  display: block;
  margin-bottom: 5px;
}

button {
  padding: 10px 15px;
  background-color: #007BFF;
  color: white;
  border: none;
  cursor: pointer;
}

button:hover {
  background-color: #0056b3;
}
"""


def _question_key(position: int) -> str:
    """Form field name for the question at a 1-based position."""
    return f"q{position}"


def render_web(
    questions: Iterable[Question],
    html_out: TextIO,
    js_out: TextIO,
    css_out: TextIO,
    *,
    title: str,
    base_name: str,
) -> None:
    """
    Write the three parts of a web quiz.

    Args:
        questions: Final question sequence (not modified)
        html_out: Sink for the .html page
        js_out: Sink for the .js answer checker
        css_out: Sink for the .css stylesheet
        title: Page title
        base_name: File name (no directory, no extension) shared by the
            three files; the page links "<base_name>.js" and "<base_name>.css"
    """
    questions = list(questions)
    safe_title = html_escape(title)
    safe_base = html_escape(base_name)

    html_out.write(_HTML_HEADER.format(title=safe_title, base_name=safe_base))
    for position, question in enumerate(questions, 1):
        key = _question_key(position)
        html_out.write(f'  <div class="question" data-id="{html_escape(question.id)}">\n')
        html_out.write(f"    <p><b>{position}.</b> {html_escape(question.stem)}</p>\n")
        html_out.write('    <div class="options">\n')
        for index, choice in enumerate(question.choices):
            letter = choice_letter(index)
            html_out.write(
                f'      <label><input type="radio" name="{key}" value="{letter}"> '
                f"({letter}) {html_escape(choice.text)}</label>\n"
            )
        html_out.write("    </div>\n")
        html_out.write(f'    <div class="answer" data-question="{key}"></div>\n')
        html_out.write("  </div>\n\n")
    html_out.write(_HTML_FOOTER.format(base_name=safe_base))

    js_out.write(_JS_HEADER)
    for position, question in enumerate(questions, 1):
        index = question.correct_index
        answer = choice_letter(index) if index is not None else ""
        js_out.write(f"    {_question_key(position)}: {js_string(answer)},\n")
    js_out.write(_JS_FOOTER)

    css_out.write(_CSS)
