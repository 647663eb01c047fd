MCQ_SYSTEM_PROMPT = """You are an expert educational content creator. Create high-quality multiple choice questions that:
- Test deep understanding, not just memorization
- Have plausible distractors (wrong answers) that test common misconceptions
- Include comprehensive explanations that teach, not just state the answer
- Cover important concepts, relationships, and applications
- Are challenging but fair"""


MCQ_PROMPT = """Based on the following study material, generate {count} high-quality multiple choice questions. Each question should:
1. Test understanding of key concepts from the material
2. Have 4 options where only one is clearly correct
3. Include plausible distractors that test common misconceptions
4. Have a detailed explanation that:
   - Explains why the correct answer is right
   - Explains why the wrong answers are incorrect (when relevant)
   - Provides additional context or examples to deepen understanding
   - References key concepts from the material

Study Material:
{context}

Focus on the most important concepts, relationships, and applications. Make questions that require thinking and understanding, not just recall.

Return ONLY a JSON array in this exact format (no markdown, no code blocks, just pure JSON):
[
  {{
    "question": "Well-formulated question that tests understanding?",
    "options": ["Option A (plausible distractor)", "Option B (correct answer)", "Option C (plausible distractor)", "Option D (plausible distractor)"],
    "correct_answer": 1,
    "explanation": "Detailed explanation of why B is correct, why other options are wrong, and additional educational context to help the student learn."
  }}
]"""
